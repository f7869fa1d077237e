from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from skills_service.services.project_errors import ProjectErrorType


class ProjectErrorRead(BaseModel):
    """Schema for project error API responses."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(alias="projectId")
    reported_skill_id: str = Field(alias="reportedSkillId")
    error_type: ProjectErrorType = Field(alias="errorType")
    count: int
    created: datetime
    last_seen: datetime = Field(alias="lastSeen")


class ProjectErrorList(BaseModel):
    """Schema for listing a project's errors."""

    errors: list[ProjectErrorRead] = Field(default_factory=list)
    total: int = 0
