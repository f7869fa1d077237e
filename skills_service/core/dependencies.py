from typing import Annotated

from fastapi import Depends, Header, Request

from skills_service.core.config import Settings, get_settings
from skills_service.services.add_skill import AddSkillHelper
from skills_service.services.project_errors import InMemoryProjectErrorService
from skills_service.services.skill_events import InMemorySkillEventsService
from skills_service.services.user_info import RequestUserInfoService


def get_skill_events_service(request: Request) -> InMemorySkillEventsService:
    """Recording service stored on the application at start-up."""
    return request.app.state.skill_events_service


def get_project_error_service(request: Request) -> InMemoryProjectErrorService:
    """Project error tracker stored on the application at start-up."""
    return request.app.state.project_error_service


def get_user_info_service(
    x_skills_user_id: Annotated[str | None, Header()] = None,
    x_skills_proxy: Annotated[bool, Header()] = False,
) -> RequestUserInfoService:
    """Dependency resolving the caller from the X-Skills-User-Id / X-Skills-Proxy headers."""
    return RequestUserInfoService(current_user_id=x_skills_user_id, can_proxy=x_skills_proxy)


def get_add_skill_helper(
    settings: Annotated[Settings, Depends(get_settings)],
    user_info_service: Annotated[RequestUserInfoService, Depends(get_user_info_service)],
    skill_events_service: Annotated[
        InMemorySkillEventsService, Depends(get_skill_events_service)
    ],
    project_error_service: Annotated[
        InMemoryProjectErrorService, Depends(get_project_error_service)
    ],
) -> AddSkillHelper:
    """Build a per-request AddSkillHelper wired to the application's collaborators."""
    return AddSkillHelper(
        settings=settings,
        user_info_service=user_info_service,
        skill_events_service=skill_events_service,
        project_error_service=project_error_service,
    )
