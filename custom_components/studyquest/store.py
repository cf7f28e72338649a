# File: store.py
"""Durable key-value storage for the StudyQuest integration.

Uses Home Assistant's Storage helper to keep a flat key-value map (points,
level, tasks, events, unlocked games) in a single JSON file, ensuring the
state is preserved across restarts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.helpers.storage import Store

from . import const

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant


class StudyQuestStore:
    """Handles persistent storage operations for StudyQuest data.

    Thin wrapper around Home Assistant's Store API exposing get/set semantics.
    set() only updates the in-memory map; schedule_save() or async_save()
    writes the whole map to disk.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store[dict[str, Any]] = Store(
            hass, const.STORAGE_VERSION, storage_key
        )
        self._data: dict[str, Any] = {}  # In-memory data cache for quick access.

    async def async_initialize(self) -> None:
        """Load data from storage during startup.

        If no data exists, or the file holds something other than a key-value
        map, starts from an empty map so every key reads as absent.
        """
        const.LOGGER.debug("DEBUG: StudyQuestStore: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = {}
        elif not isinstance(existing_data, dict):
            const.LOGGER.warning(
                "WARNING: Storage %s does not hold a key-value map, ignoring it",
                self._storage_key,
            )
            self._data = {}
        else:
            self._data = existing_data
            const.LOGGER.debug(
                "DEBUG: Loaded existing data from storage: %s keys",
                sorted(self._data.keys()),
            )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def get(self, key: str) -> Any | None:
        """Return the raw value stored under key, or None when absent."""
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store value under key in memory."""
        self._data[key] = value

    @callback
    def schedule_save(self) -> None:
        """Queue a write of the current map without waiting for it."""
        self.hass.async_create_task(self.async_save())

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s. "
                "Data contains types that cannot be converted to JSON",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s. "
                "Data structure may be corrupted",
                err,
            )

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk."""
        self._data = {}
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
