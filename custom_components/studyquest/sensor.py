# File: sensor.py
# pyright: reportIncompatibleVariableOverride=false
# ^ Suppresses Pylance warnings about @property overriding @cached_property from base classes.
"""Sensors for the StudyQuest integration.

Sensors Defined in This File (9):

# Progression
01. PointsSensor
02. LevelSensor
03. LevelProgressSensor
04. UnlockedGamesSensor

# Productivity
05. OpenTasksSensor
06. FocusStatusSensor
07. FocusEndsSensor

# Session
08. AssistantSensor
09. ProfileSensor
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import StudyQuestDataCoordinator
from .engines.reward_engine import RewardEngine
from .entity import StudyQuestCoordinatorEntity

# Coordinator-driven sensors never poll
PARALLEL_UPDATES = 0

# State values are truncated to the recorder limit
MAX_STATE_LENGTH = 255


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for StudyQuest integration."""
    coordinator: StudyQuestDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]

    async_add_entities(
        [
            PointsSensor(coordinator, entry),
            LevelSensor(coordinator, entry),
            LevelProgressSensor(coordinator, entry),
            UnlockedGamesSensor(coordinator, entry),
            OpenTasksSensor(coordinator, entry),
            FocusStatusSensor(coordinator, entry),
            FocusEndsSensor(coordinator, entry),
            AssistantSensor(coordinator, entry),
            ProfileSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
# Progression
# ------------------------------------------------------------------------------------------


class PointsSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Sensor for the total points balance.

    Uses MEASUREMENT state class for graphing. The attributes tell how many
    points are missing before the next level-up.
    """

    _attr_translation_key = "points"
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = const.LABEL_POINTS

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_POINTS)

    @property
    def native_value(self) -> int:
        """Return the total points."""
        return self.coordinator.reward_state.points

    @property
    def icon(self) -> str:
        """Return range-based icon based on progress within the level.

        - 0-49 points into the level: star-outline
        - 50-99 points into the level: star-half-full
        """
        if self.coordinator.reward_state.progress_within_level >= 50:
            return "mdi:star-half-full"
        return "mdi:star-outline"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the points still needed for the next level."""
        state = self.coordinator.reward_state
        return {
            const.ATTR_POINTS_TO_NEXT_LEVEL: RewardEngine.points_to_next_level(
                state.points, state.level
            ),
        }


class LevelSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Sensor for the current level."""

    _attr_translation_key = "level"
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:trophy"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_LEVEL)

    @property
    def native_value(self) -> int:
        """Return the current level."""
        return self.coordinator.reward_state.level

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the next level-up threshold and the next unlock."""
        state = self.coordinator.reward_state
        return {
            const.ATTR_POINTS_TO_NEXT_LEVEL: RewardEngine.points_to_next_level(
                state.points, state.level
            ),
            const.ATTR_NEXT_UNLOCK: RewardEngine.next_unlock(state.unlocked_games),
        }


class LevelProgressSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Progress towards the next hundred points, as a percentage."""

    _attr_translation_key = "level_progress"
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:progress-star"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_LEVEL_PROGRESS)

    @property
    def native_value(self) -> float:
        """Return progress within the current hundred."""
        return RewardEngine.progress_percentage(self.coordinator.reward_state.points)


class UnlockedGamesSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Number of unlocked minigames, with the unlocked and locked lists."""

    _attr_translation_key = "unlocked_games"
    _attr_icon = "mdi:gamepad-variant"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_UNLOCKED_GAMES)

    @property
    def native_value(self) -> int:
        """Return how many games are unlocked."""
        return len(self.coordinator.reward_state.unlocked_games)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return unlocked and locked games."""
        unlocked = self.coordinator.reward_state.unlocked_games
        return {
            const.ATTR_UNLOCKED: unlocked,
            const.ATTR_LOCKED: [
                game_id for game_id in const.GAME_CATALOG if game_id not in unlocked
            ],
            const.ATTR_NEXT_UNLOCK: RewardEngine.next_unlock(unlocked),
        }


# ------------------------------------------------------------------------------------------
# Productivity
# ------------------------------------------------------------------------------------------


class OpenTasksSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Number of tasks not yet completed."""

    _attr_translation_key = "open_tasks"
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:clipboard-list-outline"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_OPEN_TASKS)

    @property
    def native_value(self) -> int:
        """Return the open task count."""
        return sum(
            1 for task in self.coordinator.reward_state.tasks if not task["completed"]
        )

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the total task count."""
        return {const.ATTR_TOTAL_TASKS: len(self.coordinator.reward_state.tasks)}


class FocusStatusSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """State of the focus timer."""

    _attr_translation_key = "focus_status"
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = [
        const.FOCUS_STATE_IDLE,
        const.FOCUS_STATE_RUNNING,
        const.FOCUS_STATE_PAUSED,
        const.FOCUS_STATE_FINISHED,
    ]
    _attr_icon = "mdi:timer-outline"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_FOCUS_STATUS)

    @property
    def native_value(self) -> str:
        """Return the focus timer state."""
        return self.coordinator.focus_state

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the seconds left in the session."""
        return {const.ATTR_REMAINING_SECONDS: self.coordinator.focus_remaining}


class FocusEndsSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """End time of the running focus session; unknown otherwise."""

    _attr_translation_key = "focus_ends"
    _attr_device_class = SensorDeviceClass.TIMESTAMP
    _attr_icon = "mdi:timer-sand"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_FOCUS_ENDS)

    @property
    def native_value(self) -> datetime | None:
        """Return when the running session ends."""
        return self.coordinator.focus_ends_at


# ------------------------------------------------------------------------------------------
# Session
# ------------------------------------------------------------------------------------------


class AssistantSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Last assistant reply, with the chat history as an attribute."""

    _attr_translation_key = "assistant"
    _attr_icon = "mdi:robot-happy-outline"
    _unrecorded_attributes = frozenset({const.ATTR_HISTORY})

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_ASSISTANT)

    @property
    def native_value(self) -> str | None:
        """Return the newest assistant bubble."""
        for message in reversed(self.coordinator.chat_history):
            if not message["is_user"]:
                return message["content"][:MAX_STATE_LENGTH]
        return None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the chat log."""
        return {const.ATTR_HISTORY: list(self.coordinator.chat_history)}


class ProfileSensor(StudyQuestCoordinatorEntity, SensorEntity):
    """Name of the signed-in user."""

    _attr_translation_key = "profile"
    _attr_icon = "mdi:account-school"

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_PROFILE)

    @property
    def native_value(self) -> str | None:
        """Return the signed-in user's name, or None when signed out."""
        profile = self.coordinator.session.profile
        if not self.coordinator.session.authenticated or profile is None:
            return None
        return profile["name"] or const.DISPLAY_UNKNOWN

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the full profile record."""
        return {const.ATTR_PROFILE: self.coordinator.session.profile}
