"""Project error tracking.

Keeps a tally of problems reported against a project's configuration, such
as events reported for skills that are not defined.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol


class ProjectErrorType(str, Enum):
    SKILL_NOT_FOUND = "SkillNotFound"


class ProjectErrorService(Protocol):
    async def invalid_skill_reported(self, project_id: str, skill_id: str) -> None: ...


@dataclass
class ProjectError:
    """Aggregated error for one (project, reported id) pair"""

    project_id: str
    reported_skill_id: str
    error_type: ProjectErrorType
    count: int
    created: datetime
    last_seen: datetime


class InMemoryProjectErrorService:
    """ProjectErrorService that aggregates reports in process memory"""

    def __init__(self) -> None:
        self._errors: dict[tuple[str, str, ProjectErrorType], ProjectError] = {}

    async def invalid_skill_reported(self, project_id: str, skill_id: str) -> None:
        self._add_error(project_id, skill_id, ProjectErrorType.SKILL_NOT_FOUND)

    def list_errors(self, project_id: str) -> list[ProjectError]:
        """Errors for a project, most recently seen first"""
        errors = [e for e in self._errors.values() if e.project_id == project_id]
        return sorted(errors, key=lambda e: e.last_seen, reverse=True)

    def count_errors(self, project_id: str) -> int:
        return sum(1 for e in self._errors.values() if e.project_id == project_id)

    def _add_error(self, project_id: str, reported_id: str, error_type: ProjectErrorType) -> None:
        now = datetime.now(UTC)
        key = (project_id, reported_id, error_type)
        existing = self._errors.get(key)

        if existing is None:
            self._errors[key] = ProjectError(
                project_id=project_id,
                reported_skill_id=reported_id,
                error_type=error_type,
                count=1,
                created=now,
                last_seen=now,
            )
        else:
            existing.count += 1
            existing.last_seen = now
