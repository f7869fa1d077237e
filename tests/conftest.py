"""Shared fixtures for skills service tests."""

from collections.abc import AsyncIterator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from skills_service.core.config import Settings
from skills_service.main import create_app
from skills_service.schemas.skill_event import SkillEventResult
from skills_service.services.add_skill import AddSkillHelper
from skills_service.services.project_errors import InMemoryProjectErrorService
from skills_service.services.skill_events import InMemorySkillEventsService

PROJECT_ID = "proj1"
SKILL_ID = "skill1"


@pytest.fixture
def settings() -> Settings:
    return Settings(MAX_SELF_REPORT_MESSAGE_LENGTH=500)


@pytest.fixture
def user_info_service() -> MagicMock:
    """Identity resolver that maps every request onto 'alice'"""
    service = MagicMock()
    service.get_user_name.return_value = "alice"
    service.get_current_user_id.return_value = "alice"
    return service


@pytest.fixture
def skill_result() -> SkillEventResult:
    return SkillEventResult(
        project_id=PROJECT_ID,
        skill_id=SKILL_ID,
        name="Skill 1",
        skill_applied=True,
        points_earned=10,
    )


@pytest.fixture
def skill_events_service(skill_result: SkillEventResult) -> AsyncMock:
    service = AsyncMock()
    service.report_skill = AsyncMock(return_value=skill_result)
    return service


@pytest.fixture
def project_error_service() -> AsyncMock:
    service = AsyncMock()
    service.invalid_skill_reported = AsyncMock(return_value=None)
    return service


@pytest.fixture
def helper(
    settings: Settings,
    user_info_service: MagicMock,
    skill_events_service: AsyncMock,
    project_error_service: AsyncMock,
) -> AddSkillHelper:
    return AddSkillHelper(
        settings=settings,
        user_info_service=user_info_service,
        skill_events_service=skill_events_service,
        project_error_service=project_error_service,
    )


@pytest.fixture
def recorder() -> InMemorySkillEventsService:
    service = InMemorySkillEventsService()
    service.define_skill(PROJECT_ID, SKILL_ID, "Skill 1", points_increment=10, num_max_occurrences=2)
    service.define_skill(PROJECT_ID, "selfReported", "Self Reported", requires_approval=True)
    return service


@pytest.fixture
def error_tracker() -> InMemoryProjectErrorService:
    return InMemoryProjectErrorService()


@pytest_asyncio.fixture
async def client(
    recorder: InMemorySkillEventsService, error_tracker: InMemoryProjectErrorService
) -> AsyncIterator[AsyncClient]:
    app = create_app(skill_events_service=recorder, project_error_service=error_tracker)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Skills-User-Id": "alice"}
