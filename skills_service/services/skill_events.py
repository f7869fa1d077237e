"""
Skill event recording

Defines the contract the submission layer records events through, plus an
in-memory implementation used by the application and tests.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from skills_service.core.exceptions import ErrorCode, SkillException
from skills_service.schemas.skill_event import (
    CompletionItem,
    CompletionItemType,
    SkillEventResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkillApprovalParams:
    """
    Approval options attached to a reported skill event

    Attributes:
        approval_requested_msg: Message shown to the approver (None for the default variant)
    """

    approval_requested_msg: str | None = None


_DEFAULT_SKILL_APPROVAL_PARAMS = SkillApprovalParams()


def get_default_skill_approval_params() -> SkillApprovalParams:
    """Approval params used when the request carries no approval message"""
    return _DEFAULT_SKILL_APPROVAL_PARAMS


class SkillEventsService(Protocol):
    """Records skill events. Must be idempotent per (project, skill, user, timestamp)."""

    async def report_skill(
        self,
        project_id: str,
        skill_id: str,
        user_id: str,
        notify_if_skill_not_applied: bool,
        incoming_date: datetime | None,
        approval_params: SkillApprovalParams,
    ) -> SkillEventResult: ...


@dataclass
class SkillDefinition:
    """Skill known to the in-memory recorder"""

    project_id: str
    skill_id: str
    name: str
    points_increment: int = 10
    num_max_occurrences: int = 1
    requires_approval: bool = False


@dataclass
class SkillApprovalRequest:
    """Self-reported event waiting for an approver"""

    project_id: str
    skill_id: str
    user_id: str
    requested_on: datetime
    message: str | None = None


@dataclass
class _UserSkillState:
    timestamps: set[datetime] = field(default_factory=set)

    @property
    def occurrences(self) -> int:
        return len(self.timestamps)


class InMemorySkillEventsService:
    """
    SkillEventsService that keeps definitions and events in process memory

    Replaying the same (project, skill, user, timestamp) returns a
    not-applied result instead of recording twice.
    """

    def __init__(self) -> None:
        self._skills: dict[tuple[str, str], SkillDefinition] = {}
        self._events: dict[tuple[str, str, str], _UserSkillState] = {}
        self._approvals: list[SkillApprovalRequest] = []
        self._notifications: dict[str, list[SkillEventResult]] = {}
        self._lock = asyncio.Lock()

    def define_skill(
        self,
        project_id: str,
        skill_id: str,
        name: str,
        points_increment: int = 10,
        num_max_occurrences: int = 1,
        requires_approval: bool = False,
    ) -> SkillDefinition:
        """
        Register a skill so events can be reported against it

        Raises:
            ValueError: If points_increment or num_max_occurrences is not positive
        """
        if points_increment < 1 or num_max_occurrences < 1:
            raise ValueError("points_increment and num_max_occurrences must be positive")

        definition = SkillDefinition(
            project_id=project_id,
            skill_id=skill_id,
            name=name,
            points_increment=points_increment,
            num_max_occurrences=num_max_occurrences,
            requires_approval=requires_approval,
        )
        self._skills[(project_id, skill_id)] = definition
        return definition

    def has_project(self, project_id: str) -> bool:
        return any(pid == project_id for pid, _ in self._skills)

    def pending_approvals(self, project_id: str) -> list[SkillApprovalRequest]:
        return [a for a in self._approvals if a.project_id == project_id]

    def notifications(self, user_id: str) -> list[SkillEventResult]:
        return list(self._notifications.get(user_id, []))

    def user_points(self, project_id: str, skill_id: str, user_id: str) -> int:
        definition = self._skills.get((project_id, skill_id))
        state = self._events.get((project_id, skill_id, user_id))
        if definition is None or state is None:
            return 0
        return state.occurrences * definition.points_increment

    async def report_skill(
        self,
        project_id: str,
        skill_id: str,
        user_id: str,
        notify_if_skill_not_applied: bool,
        incoming_date: datetime | None,
        approval_params: SkillApprovalParams,
    ) -> SkillEventResult:
        async with self._lock:
            definition = self._get_definition(project_id, skill_id, user_id)
            event_time = incoming_date or datetime.now(UTC)

            if definition.requires_approval:
                result = self._request_approval(definition, user_id, event_time, approval_params)
            else:
                result = self._record(definition, user_id, event_time)

            if result.skill_applied or notify_if_skill_not_applied:
                self._notifications.setdefault(user_id, []).append(result)

            logger.info(
                f"Recorded skill event: project_id={project_id} skill_id={skill_id} "
                f"user_id={user_id} applied={result.skill_applied}"
            )
            return result

    def _get_definition(self, project_id: str, skill_id: str, user_id: str) -> SkillDefinition:
        if not self.has_project(project_id):
            raise SkillException(
                f"Project [{project_id}] does not exist",
                project_id=project_id,
                skill_id=skill_id,
                user_id=user_id,
                error_code=ErrorCode.PROJECT_NOT_FOUND,
            )

        definition = self._skills.get((project_id, skill_id))
        if definition is None:
            raise SkillException(
                "Failed to report skill event because skill definition does not exist.",
                project_id=project_id,
                skill_id=skill_id,
                user_id=user_id,
                error_code=ErrorCode.SKILL_NOT_FOUND,
            )
        return definition

    def _request_approval(
        self,
        definition: SkillDefinition,
        user_id: str,
        event_time: datetime,
        approval_params: SkillApprovalParams,
    ) -> SkillEventResult:
        already_pending = any(
            a.project_id == definition.project_id
            and a.skill_id == definition.skill_id
            and a.user_id == user_id
            for a in self._approvals
        )
        if already_pending:
            explanation = "This skill was already submitted for approval and is still pending approval"
        else:
            self._approvals.append(
                SkillApprovalRequest(
                    project_id=definition.project_id,
                    skill_id=definition.skill_id,
                    user_id=user_id,
                    requested_on=event_time,
                    message=approval_params.approval_requested_msg,
                )
            )
            explanation = "Skill was submitted for approval"

        return self._result(definition, applied=False, explanation=explanation)

    def _record(
        self, definition: SkillDefinition, user_id: str, event_time: datetime
    ) -> SkillEventResult:
        key = (definition.project_id, definition.skill_id, user_id)
        state = self._events.setdefault(key, _UserSkillState())

        if event_time in state.timestamps:
            return self._result(
                definition,
                applied=False,
                explanation="Skill event was already recorded for this timestamp",
            )

        if state.occurrences >= definition.num_max_occurrences:
            return self._result(
                definition,
                applied=False,
                explanation="This skill reached its maximum points",
            )

        state.timestamps.add(event_time)

        completed: list[CompletionItem] = []
        if state.occurrences == definition.num_max_occurrences:
            completed.append(
                CompletionItem(
                    type=CompletionItemType.SKILL,
                    id=definition.skill_id,
                    name=definition.name,
                )
            )

        return self._result(
            definition,
            applied=True,
            explanation="Skill event was applied",
            points_earned=definition.points_increment,
            completed=completed,
        )

    @staticmethod
    def _result(
        definition: SkillDefinition,
        applied: bool,
        explanation: str,
        points_earned: int = 0,
        completed: list[CompletionItem] | None = None,
    ) -> SkillEventResult:
        return SkillEventResult(
            project_id=definition.project_id,
            skill_id=definition.skill_id,
            name=definition.name,
            skill_applied=applied,
            points_earned=points_earned,
            explanation=explanation,
            completed=completed or [],
        )
