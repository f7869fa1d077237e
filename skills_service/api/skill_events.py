"""Skill event API endpoints."""

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Body, Depends

from skills_service.core.dependencies import get_add_skill_helper, get_project_error_service
from skills_service.schemas.project_error import ProjectErrorList, ProjectErrorRead
from skills_service.schemas.skill_event import ErrorResponse, SkillEventRequest, SkillEventResult
from skills_service.services.add_skill import AddSkillHelper
from skills_service.services.project_errors import InMemoryProjectErrorService

router = APIRouter(prefix="/projects/{project_id}", tags=["skill-events"])

_error_responses = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/skills/{skill_id}", response_model=SkillEventResult, responses=_error_responses
)
@router.put(
    "/skills/{skill_id}",
    response_model=SkillEventResult,
    responses=_error_responses,
    include_in_schema=False,
)
async def report_skill(
    project_id: str,
    skill_id: str,
    helper: Annotated[AddSkillHelper, Depends(get_add_skill_helper)],
    skill_event_request: Annotated[SkillEventRequest | None, Body()] = None,
) -> SkillEventResult:
    """Report that a user achieved a skill.

    Args:
        project_id: Project the skill belongs to
        skill_id: Skill that was achieved
        skill_event_request: Optional event details (user, timestamp, approval message)

    Returns:
        SkillEventResult describing whether the event was applied
    """
    return await helper.add_skill(project_id, skill_id, skill_event_request)


@router.get("/errors", response_model=ProjectErrorList)
async def list_project_errors(
    project_id: str,
    project_error_service: Annotated[
        InMemoryProjectErrorService, Depends(get_project_error_service)
    ],
) -> ProjectErrorList:
    """List configuration errors reported for a project, most recent first."""
    errors = project_error_service.list_errors(project_id)
    return ProjectErrorList(
        errors=[ProjectErrorRead.model_validate(asdict(error)) for error in errors],
        total=len(errors),
    )
