from skills_service.schemas.project_error import ProjectErrorList, ProjectErrorRead
from skills_service.schemas.skill_event import (
    CompletionItem,
    CompletionItemType,
    ErrorResponse,
    SkillEventRequest,
    SkillEventResult,
)

__all__ = [
    "SkillEventRequest",
    "SkillEventResult",
    "CompletionItem",
    "CompletionItemType",
    "ErrorResponse",
    "ProjectErrorRead",
    "ProjectErrorList",
]
