"""
Error types for skill event handling

Every failure carries an ErrorCode so callers can dispatch on the kind of
failure instead of on the exception class.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Kinds of failures surfaced to API callers"""

    BAD_PARAM = "BadParam"
    ACCESS_DENIED = "AccessDenied"
    SKILL_NOT_FOUND = "SkillNotFound"
    PROJECT_NOT_FOUND = "ProjectNotFound"
    INTERNAL_ERROR = "InternalError"


class SkillException(Exception):
    """
    Failure tied to a project/skill/user

    Attributes:
        message: Human-readable explanation
        project_id: Project the failure relates to (if known)
        skill_id: Skill the failure relates to (if known)
        user_id: User the failure relates to (if known)
        error_code: Classification used for dispatch and HTTP status mapping
    """

    def __init__(
        self,
        message: str,
        project_id: str | None = None,
        skill_id: str | None = None,
        user_id: str | None = None,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.project_id = project_id
        self.skill_id = skill_id
        self.user_id = user_id
        self.error_code = error_code

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, project_id={self.project_id!r}, "
            f"skill_id={self.skill_id!r}, error_code={self.error_code.value!r})"
        )


class SkillsAuthorizationException(SkillException):
    """Raised when the caller may not act as the requested user"""

    def __init__(
        self,
        message: str,
        project_id: str | None = None,
        skill_id: str | None = None,
        user_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            project_id=project_id,
            skill_id=skill_id,
            user_id=user_id,
            error_code=ErrorCode.ACCESS_DENIED,
        )
