"""
Skills service

Accepts skill achievement events, validates them and records them with a
fixed number of attempts.
"""

from skills_service.core.exceptions import ErrorCode, SkillException, SkillsAuthorizationException
from skills_service.services.add_skill import AddSkillHelper

__all__ = [
    "AddSkillHelper",
    "ErrorCode",
    "SkillException",
    "SkillsAuthorizationException",
]
