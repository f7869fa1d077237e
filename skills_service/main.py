"""FastAPI application factory for the skills service."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from skills_service.api import skill_events
from skills_service.core.config import get_settings
from skills_service.core.exceptions import ErrorCode, SkillException
from skills_service.core.logging import configure_logging
from skills_service.schemas.skill_event import ErrorResponse
from skills_service.services.project_errors import InMemoryProjectErrorService
from skills_service.services.skill_events import InMemorySkillEventsService

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.BAD_PARAM: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SKILL_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PROJECT_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def skill_exception_handler(request: Request, exc: SkillException) -> JSONResponse:
    """Render a SkillException as an ErrorResponse with the mapped status code."""
    status_code = ERROR_STATUS_CODES[exc.error_code]
    if status_code >= 500:
        logger.error(f"Request failed: path={request.url.path} error={exc!r}")
    else:
        logger.warning(f"Request rejected: path={request.url.path} error={exc!r}")

    body = ErrorResponse(
        explanation=exc.message,
        error_code=exc.error_code.value,
        project_id=exc.project_id,
        skill_id=exc.skill_id,
        user_id=exc.user_id,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def create_app(
    skill_events_service: InMemorySkillEventsService | None = None,
    project_error_service: InMemoryProjectErrorService | None = None,
) -> FastAPI:
    """Create the application with its collaborators.

    Args:
        skill_events_service: Recording service (a fresh in-memory one if omitted)
        project_error_service: Error tracker (a fresh in-memory one if omitted)
    """
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title=settings.APP_NAME)
    app.state.skill_events_service = skill_events_service or InMemorySkillEventsService()
    app.state.project_error_service = project_error_service or InMemoryProjectErrorService()

    app.add_exception_handler(SkillException, skill_exception_handler)
    app.include_router(skill_events.router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
