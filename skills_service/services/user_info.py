"""User identity resolution for skill event reporting."""

import logging
from typing import Protocol

from skills_service.core.exceptions import SkillsAuthorizationException

logger = logging.getLogger(__name__)


class UserInfoService(Protocol):
    """Maps a requested user id onto the user an event is recorded for."""

    def get_user_name(self, requested_user_id: str | None, allow_anonymous: bool) -> str: ...

    def get_current_user_id(self) -> str | None: ...


class RequestUserInfoService:
    """Resolves identities for a single authenticated caller.

    Args:
        current_user_id: Id of the caller making the request (None if anonymous)
        can_proxy: Whether the caller may report events on behalf of other users
    """

    def __init__(self, current_user_id: str | None, can_proxy: bool = False) -> None:
        self.current_user_id = _normalize(current_user_id)
        self.can_proxy = can_proxy

    def get_current_user_id(self) -> str | None:
        return self.current_user_id

    def get_user_name(self, requested_user_id: str | None, allow_anonymous: bool) -> str:
        """Return the user id an event should be recorded for.

        Args:
            requested_user_id: User the caller asked to act for (None for themselves)
            allow_anonymous: Whether an unauthenticated caller resolves to an empty id

        Returns:
            The resolved, normalized user id

        Raises:
            SkillsAuthorizationException: If there is no caller and anonymous access
                is not allowed, or the caller may not act for requested_user_id
        """
        requested = _normalize(requested_user_id)

        if self.current_user_id is None:
            if allow_anonymous and requested is None:
                return ""
            logger.warning(f"Unauthenticated identity resolution: requested_user_id={requested}")
            raise SkillsAuthorizationException(
                "Failed to resolve user: no authenticated user",
                user_id=requested,
            )

        if requested is None or requested == self.current_user_id:
            return self.current_user_id

        if not self.can_proxy:
            logger.warning(
                f"Proxy request denied: current_user_id={self.current_user_id} "
                f"requested_user_id={requested}"
            )
            raise SkillsAuthorizationException(
                f"User [{self.current_user_id}] is not allowed to report events for user [{requested}]",
                user_id=requested,
            )

        return requested


def _normalize(user_id: str | None) -> str | None:
    if user_id is None:
        return None
    stripped = user_id.strip()
    return stripped.lower() if stripped else None
