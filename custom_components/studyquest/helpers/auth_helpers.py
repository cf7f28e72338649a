# File: helpers/auth_helpers.py
"""Identity helper functions for StudyQuest.

Home Assistant's auth system is the identity provider: signing in resolves
the calling HA user into a profile record. All functions here require a
`hass` object for auth system access.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .. import const

if TYPE_CHECKING:
    from homeassistant.auth.models import User
    from homeassistant.core import HomeAssistant

    from ..type_defs import UserProfile


@dataclass
class UserSession:
    """Authenticated flag plus the profile of the signed-in user."""

    authenticated: bool = False
    profile: UserProfile | None = None

    def sign_in(self, profile: UserProfile) -> None:
        """Mark the session authenticated for profile."""
        self.authenticated = True
        self.profile = profile

    def sign_out(self) -> None:
        """Clear the session."""
        self.authenticated = False
        self.profile = None


def build_profile(user_id: str, name: str | None) -> UserProfile:
    """Build a profile record from an HA user id and display name."""
    display_name = (name or "").strip()
    given_name, _, family_name = display_name.partition(" ")
    return {
        const.PROFILE_SUB: user_id,
        const.PROFILE_NAME: display_name,
        const.PROFILE_GIVEN_NAME: given_name,
        const.PROFILE_FAMILY_NAME: family_name.strip(),
        const.PROFILE_EMAIL: "",
        const.PROFILE_PICTURE: "",
    }


async def async_resolve_profile(
    hass: HomeAssistant, user_id: str | None
) -> UserProfile | None:
    """Resolve user_id into a profile, or None when sign-in is not possible.

    Failures are logged only.

    Args:
        hass: HomeAssistant instance
        user_id: HA user id from the service call context

    Returns:
        UserProfile if the user exists and is active, None otherwise
    """
    if not user_id:
        const.LOGGER.warning("WARNING: Sign in: call has no user context")
        return None

    user: User | None = await hass.auth.async_get_user(user_id)
    if not user:
        const.LOGGER.warning("WARNING: Sign in: Invalid user ID '%s'", user_id)
        return None

    if not user.is_active:
        const.LOGGER.warning("WARNING: Sign in: User '%s' is not active", user.name)
        return None

    return build_profile(user.id, user.name)
