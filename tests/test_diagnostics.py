"""Tests for StudyQuest diagnostics.

The export carries the raw storage map so it can be compared with the
studyquest_data file, plus runtime values with secrets redacted.
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names

from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.studyquest import const
from custom_components.studyquest.diagnostics import (
    async_get_config_entry_diagnostics,
)


@pytest.fixture
def mock_storage_data() -> dict[str, Any]:
    """Return stored data for a returning user."""
    return {const.DATA_POINTS: 42, const.DATA_LEVEL: 1}


async def test_config_entry_diagnostics(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Diagnostics return storage and runtime state without the API key."""
    result = await async_get_config_entry_diagnostics(hass, init_integration)

    assert result["storage"][const.DATA_POINTS] == 42
    assert result["entry"][const.CONF_API_KEY] == "**REDACTED**"
    assert result["runtime"]["focus_state"] == const.FOCUS_STATE_IDLE
    assert result["runtime"]["signed_in"] is False
