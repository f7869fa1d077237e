from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SkillEventRequest(BaseModel):
    """Schema for reporting a skill event (POST/PUT body).

    All fields are optional; an absent body behaves like an empty one.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str | None = Field(
        None, alias="userId", description="User to report for (defaults to the caller)"
    )
    timestamp: int | None = Field(
        None,
        description="Event time in epoch milliseconds; missing, zero or negative means now",
    )
    notify_if_skill_not_applied: bool = Field(
        False,
        alias="notifyIfSkillNotApplied",
        description="Notify the user even if the event did not apply the skill",
    )
    is_retry: bool = Field(
        False,
        alias="isRetry",
        description="Set by clients re-sending an event (diagnostic only)",
    )
    approval_requested_msg: str | None = Field(
        None,
        alias="approvalRequestedMsg",
        description="Message for the approver of a self-reported skill",
    )


class CompletionItemType(str, Enum):
    """What a skill event completed."""

    SKILL = "Skill"
    SUBJECT = "Subject"
    OVERALL = "Overall"
    BADGE = "Badge"
    GLOBAL_BADGE = "GlobalBadge"
    LEVEL = "Level"


class CompletionItem(BaseModel):
    """Achievement unlocked as a side effect of a skill event."""

    model_config = ConfigDict(populate_by_name=True)

    type: CompletionItemType
    level: int | None = None
    id: str
    name: str


class SkillEventResult(BaseModel):
    """Schema for skill event responses."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    skill_id: str = Field(alias="skillId")
    name: str | None = None
    skill_applied: bool = Field(True, alias="skillApplied")
    points_earned: int = Field(0, alias="pointsEarned")
    explanation: str = "Skill event was applied"
    completed: list[CompletionItem] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Schema for error responses raised from SkillException."""

    model_config = ConfigDict(populate_by_name=True)

    explanation: str
    error_code: str = Field(alias="errorCode")
    success: bool = False
    project_id: str | None = Field(None, alias="projectId")
    skill_id: str | None = Field(None, alias="skillId")
    user_id: str | None = Field(None, alias="userId")
