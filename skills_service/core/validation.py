"""Request validation helpers.

Each helper raises a BAD_PARAM SkillException bound to the project/skill when
its rule does not hold.
"""

from skills_service.core.exceptions import ErrorCode, SkillException


def is_true(
    condition: bool,
    message: str,
    project_id: str | None = None,
    skill_id: str | None = None,
) -> None:
    """Raise a BAD_PARAM failure unless condition holds.

    Args:
        condition: Rule outcome
        message: Explanation returned to the caller when the rule fails
        project_id: Project the request targets
        skill_id: Skill the request targets

    Raises:
        SkillException: BAD_PARAM if condition is False
    """
    if not condition:
        raise SkillException(
            message,
            project_id=project_id,
            skill_id=skill_id,
            error_code=ErrorCode.BAD_PARAM,
        )


def is_not_blank(
    value: str | None,
    arg_name: str,
    project_id: str | None = None,
    skill_id: str | None = None,
) -> None:
    """Raise a BAD_PARAM failure if value is None or whitespace only."""
    is_true(
        value is not None and value.strip() != "",
        f"{arg_name} was not provided.",
        project_id,
        skill_id,
    )
