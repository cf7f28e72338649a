# File: __init__.py
"""Initialization file for the StudyQuest integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization for data synchronization.
- Storage management for persistent data handling.
"""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from . import const
from .assistant import AssistantClient
from .coordinator import StudyQuestDataCoordinator
from .services import async_setup_services, async_unload_services
from .store import StudyQuestStore


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for StudyQuest entry: %s", entry.entry_id)

    # Initialize the storage manager to handle persistent data.
    storage_manager = StudyQuestStore(hass, const.STORAGE_KEY)
    await storage_manager.async_initialize()

    settings = {**entry.data, **entry.options}
    assistant = AssistantClient(
        async_get_clientsession(hass),
        settings.get(const.CONF_API_KEY),
        model=settings.get(const.CONF_MODEL, const.DEFAULT_ASSISTANT_MODEL),
        endpoint=settings.get(const.CONF_ENDPOINT, const.DEFAULT_ASSISTANT_ENDPOINT),
    )

    # Create the data coordinator; it loads the reward state from storage.
    coordinator = StudyQuestDataCoordinator(hass, entry, storage_manager, assistant)

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise ConfigEntryNotReady from e

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORAGE_MANAGER: storage_manager,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    entry.async_on_unload(entry.add_update_listener(async_reload_entry))
    entry.async_on_unload(coordinator.cancel_focus_end)

    const.LOGGER.info("INFO: StudyQuest setup complete for entry: %s", entry.entry_id)
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry after its options change."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading StudyQuest entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        entry_data = hass.data[const.DOMAIN].pop(entry.entry_id)

        # Flush any queued write before the store goes away
        storage_manager: StudyQuestStore = entry_data[const.STORAGE_MANAGER]
        await storage_manager.async_save()

        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing StudyQuest entry: %s", entry.entry_id)

    storage_manager = StudyQuestStore(hass, const.STORAGE_KEY)
    await storage_manager.async_delete_storage()

    const.LOGGER.info("INFO: StudyQuest entry data cleared: %s", entry.entry_id)
