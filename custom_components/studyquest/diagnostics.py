"""Diagnostics support for StudyQuest integration.

Returns the raw storage data, byte-for-byte identical to the studyquest_data
file, plus the runtime state that is not persisted.
"""

from typing import Any

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from . import const
from .coordinator import StudyQuestDataCoordinator

TO_REDACT = {const.CONF_API_KEY, const.PROFILE_EMAIL}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: StudyQuestDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    return {
        "entry": async_redact_data({**entry.data, **entry.options}, TO_REDACT),
        "storage": coordinator.storage_manager.data,
        "runtime": {
            "focus_state": coordinator.focus_state,
            "focus_remaining": coordinator.focus_remaining,
            "chat_messages": len(coordinator.chat_history),
            "signed_in": coordinator.session.authenticated,
            "profile": async_redact_data(coordinator.session.profile or {}, TO_REDACT),
        },
    }
