"""Base entity classes for StudyQuest integration."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import StudyQuestDataCoordinator
from .helpers.device_helpers import create_study_device_info


class StudyQuestCoordinatorEntity(CoordinatorEntity[StudyQuestDataCoordinator]):
    """Base entity class for StudyQuest entities with typed coordinator access.

    Every entity belongs to the single study companion device of its config
    entry and builds its unique id as "{entry_id}{suffix}".
    """

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: StudyQuestDataCoordinator,
        entry: ConfigEntry,
        uid_suffix: str,
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: StudyQuestDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            uid_suffix: Per-entity suffix appended to the entry id.
        """
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{uid_suffix}"
        self._attr_device_info = create_study_device_info(entry)

    @property
    def coordinator(self) -> StudyQuestDataCoordinator:
        """Return typed coordinator.

        Uses object.__getattribute__ to access the private _coordinator attribute
        set by the parent CoordinatorEntity class.
        """
        return object.__getattribute__(self, "_coordinator")

    @coordinator.setter
    def coordinator(self, value: StudyQuestDataCoordinator) -> None:
        """Set coordinator with proper typing."""
        object.__setattr__(self, "_coordinator", value)
