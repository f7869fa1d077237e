"""
Skill event submission

Validates a reported skill event, resolves the user it is recorded for and
records it with a fixed number of attempts. An event for an unknown skill is
also reported to the project's error tracker.
"""

import logging
import time
from datetime import UTC, datetime, timedelta
from typing import assert_never

from skills_service.core.config import Settings
from skills_service.core.exceptions import ErrorCode, SkillException
from skills_service.core.profiling import profile
from skills_service.core.retry import with_retry
from skills_service.core.validation import is_not_blank, is_true
from skills_service.schemas.skill_event import SkillEventRequest, SkillEventResult
from skills_service.services.project_errors import ProjectErrorService
from skills_service.services.skill_events import (
    SkillApprovalParams,
    SkillEventsService,
    get_default_skill_approval_params,
)
from skills_service.services.user_info import UserInfoService

logger = logging.getLogger(__name__)

REPORT_SKILL_ATTEMPTS = 3

# Allowed forward clock drift between the caller and this server
CLOCK_DRIFT_TOLERANCE_MS = 30_000

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


def millis_to_datetime(timestamp: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=timestamp)


def to_date_string(timestamp: int | None) -> str:
    """
    ISO-8601 UTC rendering without milliseconds, empty for None

    Timestamps outside the datetime range are rendered as the raw number.
    """
    if timestamp is None:
        return ""
    try:
        return millis_to_datetime(timestamp).strftime("%Y-%m-%dT%H:%M:%SZ")
    except OverflowError:
        return str(timestamp)


class AddSkillHelper:
    """
    Reports skill events on behalf of users

    Each call to add_skill is independent: nothing is kept between calls.
    """

    def __init__(
        self,
        settings: Settings,
        user_info_service: UserInfoService,
        skill_events_service: SkillEventsService,
        project_error_service: ProjectErrorService,
    ) -> None:
        self.settings = settings
        self.user_info_service = user_info_service
        self.skill_events_service = skill_events_service
        self.project_error_service = project_error_service

    async def add_skill(
        self,
        project_id: str,
        skill_id: str,
        request: SkillEventRequest | None = None,
    ) -> SkillEventResult:
        """
        Validate, resolve and record a single skill event

        Args:
            project_id: Project the skill belongs to
            skill_id: Skill that was achieved
            request: Event details (None behaves like an empty request)

        Returns:
            SkillEventResult from the recording service

        Raises:
            SkillException: BAD_PARAM for invalid input (nothing is recorded),
                ACCESS_DENIED if the user cannot be resolved, or the last
                recording failure once all attempts are used
        """
        if request is None:
            request = SkillEventRequest()

        incoming_date = self._validate(project_id, skill_id, request)

        user_id = self.user_info_service.get_user_name(request.user_id, False)
        logger.info(
            f"ReportSkill (ProjectId=[{project_id}], SkillId=[{skill_id}], "
            f"CurrentUser=[{self.user_info_service.get_current_user_id()}], "
            f"RequestUser=[{request.user_id}], RequestDate=[{to_date_string(request.timestamp)}], "
            f"IsRetry=[{request.is_retry}])"
        )

        approval_params = self._approval_params(request)

        async def report() -> SkillEventResult:
            return await self.skill_events_service.report_skill(
                project_id,
                skill_id,
                user_id,
                request.notify_if_skill_not_applied,
                incoming_date,
                approval_params,
            )

        with profile("retry-reportSkill"):
            try:
                return await with_retry(REPORT_SKILL_ATTEMPTS, report, name="reportSkill")
            except SkillException as e:
                await self._handle_failure(project_id, skill_id, e)
                raise

    def _validate(
        self, project_id: str, skill_id: str, request: SkillEventRequest
    ) -> datetime | None:
        """Check the request and return the event time (None means record time)"""
        is_not_blank(project_id, "Project Id", project_id, skill_id)
        is_not_blank(skill_id, "Skill Id", project_id, skill_id)

        incoming_date = None
        timestamp = request.timestamp
        if timestamp is not None and timestamp > 0:
            is_true(
                timestamp <= current_time_millis() + CLOCK_DRIFT_TOLERANCE_MS,
                "Skill Events may not be in the future",
                project_id,
                skill_id,
            )
            incoming_date = millis_to_datetime(timestamp)

        message = request.approval_requested_msg
        if message is not None:
            max_length = self.settings.MAX_SELF_REPORT_MESSAGE_LENGTH
            is_true(
                len(message) <= max_length,
                f"message has length of {len(message)}, maximum allowed length is {max_length}",
                project_id,
                skill_id,
            )

        return incoming_date

    @staticmethod
    def _approval_params(request: SkillEventRequest) -> SkillApprovalParams:
        if request.approval_requested_msg is not None:
            return SkillApprovalParams(approval_requested_msg=request.approval_requested_msg)
        return get_default_skill_approval_params()

    async def _handle_failure(self, project_id: str, skill_id: str, error: SkillException) -> None:
        """Run the side effect tied to the terminal failure's error code"""
        match error.error_code:
            case ErrorCode.SKILL_NOT_FOUND:
                await self._report_invalid_skill(project_id, skill_id)
            case (
                ErrorCode.BAD_PARAM
                | ErrorCode.ACCESS_DENIED
                | ErrorCode.PROJECT_NOT_FOUND
                | ErrorCode.INTERNAL_ERROR
            ):
                pass
            case _:
                assert_never(error.error_code)

    async def _report_invalid_skill(self, project_id: str, skill_id: str) -> None:
        try:
            await self.project_error_service.invalid_skill_reported(project_id, skill_id)
        except Exception:
            # The original SkillException is re-raised by the caller
            logger.exception(
                f"Failed to record invalid skill report: project_id={project_id} skill_id={skill_id}"
            )
