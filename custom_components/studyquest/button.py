# File: button.py
# pyright: reportIncompatibleVariableOverride=false
# ^ Suppresses Pylance warnings about @property overriding @cached_property from base classes.
"""Buttons for StudyQuest integration.

Features:
1) FocusStartButton: starts a fresh focus session or resumes a paused one.
2) FocusPauseButton: pauses the running session.
3) FocusClaimButton: claims the points of a finished session.
"""

from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import StudyQuestDataCoordinator
from .engines.timer_engine import FocusTimerError
from .entity import StudyQuestCoordinatorEntity

# Set to 1 (serialized) for action buttons that modify state
PARALLEL_UPDATES = 1


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up focus timer buttons."""
    coordinator: StudyQuestDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    async_add_entities(
        [
            FocusStartButton(coordinator, entry),
            FocusPauseButton(coordinator, entry),
            FocusClaimButton(coordinator, entry),
        ]
    )


class FocusStartButton(StudyQuestCoordinatorEntity, ButtonEntity):
    """Button that starts or resumes the focus session."""

    _attr_translation_key = "focus_start"
    _attr_icon = "mdi:play-circle-outline"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the button."""
        super().__init__(coordinator, entry, const.BUTTON_UID_SUFFIX_FOCUS_START)

    async def async_press(self) -> None:
        """Handle the button press event."""
        try:
            self.coordinator.start_focus_session()
        except FocusTimerError as err:
            const.LOGGER.warning("WARNING: Focus start button: %s", err)
            raise HomeAssistantError(str(err)) from err


class FocusPauseButton(StudyQuestCoordinatorEntity, ButtonEntity):
    """Button that pauses the running focus session."""

    _attr_translation_key = "focus_pause"
    _attr_icon = "mdi:pause-circle-outline"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the button."""
        super().__init__(coordinator, entry, const.BUTTON_UID_SUFFIX_FOCUS_PAUSE)

    async def async_press(self) -> None:
        """Handle the button press event."""
        try:
            self.coordinator.pause_focus_session()
        except FocusTimerError as err:
            const.LOGGER.warning("WARNING: Focus pause button: %s", err)
            raise HomeAssistantError(str(err)) from err


class FocusClaimButton(StudyQuestCoordinatorEntity, ButtonEntity):
    """Button that claims a finished focus session."""

    _attr_translation_key = "focus_claim"
    _attr_icon = "mdi:gift-outline"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the button."""
        super().__init__(coordinator, entry, const.BUTTON_UID_SUFFIX_FOCUS_CLAIM)

    async def async_press(self) -> None:
        """Handle the button press event."""
        try:
            self.coordinator.claim_focus_session()
        except FocusTimerError as err:
            const.LOGGER.warning("WARNING: Focus claim button: %s", err)
            raise HomeAssistantError(str(err)) from err
