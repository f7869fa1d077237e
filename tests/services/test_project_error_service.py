"""Tests for the in-memory project error tracker."""

import pytest

from skills_service.services.project_errors import InMemoryProjectErrorService, ProjectErrorType


@pytest.mark.asyncio
async def test_first_report_creates_error():
    service = InMemoryProjectErrorService()

    await service.invalid_skill_reported("proj1", "missing")

    errors = service.list_errors("proj1")
    assert len(errors) == 1
    assert errors[0].reported_skill_id == "missing"
    assert errors[0].error_type == ProjectErrorType.SKILL_NOT_FOUND
    assert errors[0].count == 1
    assert errors[0].created == errors[0].last_seen


@pytest.mark.asyncio
async def test_repeated_reports_are_counted():
    service = InMemoryProjectErrorService()

    await service.invalid_skill_reported("proj1", "missing")
    await service.invalid_skill_reported("proj1", "missing")

    errors = service.list_errors("proj1")
    assert len(errors) == 1
    assert errors[0].count == 2
    assert errors[0].last_seen >= errors[0].created


@pytest.mark.asyncio
async def test_errors_are_scoped_to_project():
    service = InMemoryProjectErrorService()

    await service.invalid_skill_reported("proj1", "a")
    await service.invalid_skill_reported("proj1", "b")
    await service.invalid_skill_reported("proj2", "a")

    assert service.count_errors("proj1") == 2
    assert service.count_errors("proj2") == 1
    assert service.list_errors("proj3") == []


@pytest.mark.asyncio
async def test_most_recent_error_listed_first():
    service = InMemoryProjectErrorService()

    await service.invalid_skill_reported("proj1", "older")
    await service.invalid_skill_reported("proj1", "newer")
    await service.invalid_skill_reported("proj1", "older")

    assert [e.reported_skill_id for e in service.list_errors("proj1")][0] == "older"
