"""Shared fixtures for StudyQuest tests."""

from typing import Any
from unittest.mock import patch

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.studyquest.const import (
    CONF_API_KEY,
    CONF_ENDPOINT,
    CONF_MODEL,
    DEFAULT_ASSISTANT_ENDPOINT,
    DEFAULT_ASSISTANT_MODEL,
    DOMAIN,
    STUDYQUEST_TITLE,
)

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


class FakeStore:
    """In-memory key-value store for pure RewardState tests."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})
        self.save_count = 0

    def get(self, key: str) -> Any | None:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def schedule_save(self) -> None:
        self.save_count += 1


@pytest.fixture
def fake_store() -> FakeStore:
    """Return an empty in-memory store."""
    return FakeStore()


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=STUDYQUEST_TITLE,
        data={
            CONF_API_KEY: "test-api-key",
            CONF_MODEL: DEFAULT_ASSISTANT_MODEL,
            CONF_ENDPOINT: DEFAULT_ASSISTANT_ENDPOINT,
        },
        entry_id="test_entry_id",
        unique_id="test_unique_id",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any]:
    """Return stored data for a fresh install."""
    return {}


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any],  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the StudyQuest integration for testing with mocked storage."""
    mock_config_entry.add_to_hass(hass)

    # Mock the Store's async_load to return our test data
    with patch(
        "homeassistant.helpers.storage.Store.async_load",
        return_value=mock_storage_data,
    ):
        assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
        await hass.async_block_till_done()

    return mock_config_entry


def get_coordinator(hass: HomeAssistant, entry: MockConfigEntry) -> Any:
    """Return the coordinator of a loaded entry."""
    return hass.data[DOMAIN][entry.entry_id]["coordinator"]
