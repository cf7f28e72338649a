"""Tests for the StudyQuest sensor, button, calendar and to-do entities."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import entity_registry as er
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
)

from custom_components.studyquest import const
from custom_components.studyquest.sensor import AssistantSensor

from tests.conftest import get_coordinator


def _entity_id(
    hass: HomeAssistant, platform: str, entry: MockConfigEntry, suffix: str
) -> str:
    entity_id = er.async_get(hass).async_get_entity_id(
        platform, const.DOMAIN, f"{entry.entry_id}{suffix}"
    )
    assert entity_id is not None
    return entity_id


async def _press(hass: HomeAssistant, entity_id: str) -> None:
    await hass.services.async_call(
        "button", "press", {"entity_id": entity_id}, blocking=True
    )


# =============================================================================
# Sensors
# =============================================================================


class TestSensors:
    """Tests for the progression and productivity sensors."""

    async def test_fresh_install_states(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """A fresh install shows zero points at level 0 with one game."""
        points = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_POINTS
        )
        level = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_LEVEL
        )
        games = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_UNLOCKED_GAMES
        )
        focus = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_FOCUS_STATUS
        )

        assert hass.states.get(points).state == "0"
        assert hass.states.get(level).state == "0"
        assert hass.states.get(games).state == "1"
        assert hass.states.get(games).attributes[const.ATTR_NEXT_UNLOCK] == (
            const.GAME_PONG
        )
        assert hass.states.get(focus).state == const.FOCUS_STATE_IDLE

    async def test_sensors_follow_awards(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """Sensors update after each unit of work."""
        coordinator = get_coordinator(hass, init_integration)
        coordinator.add_points(125)
        coordinator.add_task("Read")
        await hass.async_block_till_done()

        points = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_POINTS
        )
        progress = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_LEVEL_PROGRESS
        )
        tasks = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_OPEN_TASKS
        )
        games = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_UNLOCKED_GAMES
        )

        assert hass.states.get(points).state == "130"
        attributes = hass.states.get(points).attributes
        assert attributes[const.ATTR_POINTS_TO_NEXT_LEVEL] == 70
        assert float(hass.states.get(progress).state) == 30.0
        assert hass.states.get(tasks).state == "1"
        assert hass.states.get(games).attributes[const.ATTR_UNLOCKED] == [
            const.GAME_TIC_TAC_TOE,
            const.GAME_PONG,
        ]

    def test_chat_history_is_not_recorded(self) -> None:
        """The chat history attribute stays out of the recorder."""
        assert const.ATTR_HISTORY in AssistantSensor._unrecorded_attributes


# =============================================================================
# Focus buttons
# =============================================================================


class TestFocusButtons:
    """Tests for the focus timer buttons."""

    async def test_full_session(
        self, hass: HomeAssistant, init_integration: MockConfigEntry, freezer: Any
    ) -> None:
        """Start, pause, resume, finish and claim a session."""
        coordinator = get_coordinator(hass, init_integration)
        start = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_START
        )
        pause = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_PAUSE
        )
        claim = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_CLAIM
        )
        status = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_FOCUS_STATUS
        )

        await _press(hass, start)
        assert coordinator.reward_state.points == 10
        assert hass.states.get(status).state == const.FOCUS_STATE_RUNNING

        freezer.tick(timedelta(minutes=5))
        await _press(hass, pause)
        assert hass.states.get(status).state == const.FOCUS_STATE_PAUSED

        freezer.tick(timedelta(minutes=30))
        await _press(hass, start)
        assert coordinator.reward_state.points == 10

        freezer.tick(timedelta(minutes=20))
        assert coordinator.focus_state == const.FOCUS_STATE_FINISHED

        await _press(hass, claim)
        assert coordinator.reward_state.points == 60
        assert coordinator.focus_state == const.FOCUS_STATE_IDLE

    async def test_claim_before_finish(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """Claiming an unfinished session fails."""
        claim = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_CLAIM
        )

        with pytest.raises(HomeAssistantError):
            await _press(hass, claim)

    async def test_status_turns_finished_at_end_time(
        self, hass: HomeAssistant, init_integration: MockConfigEntry, freezer: Any
    ) -> None:
        """The status sensor flips to finished on its own when time runs out."""
        start = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_START
        )
        status = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_FOCUS_STATUS
        )
        ends = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_FOCUS_ENDS
        )

        await _press(hass, start)
        assert hass.states.get(ends).state != "unknown"

        freezer.tick(timedelta(seconds=const.FOCUS_SESSION_SECONDS + 1))
        async_fire_time_changed(hass, dt_util.utcnow())
        await hass.async_block_till_done()

        assert hass.states.get(status).state == const.FOCUS_STATE_FINISHED
        assert hass.states.get(ends).state == "unknown"

    async def test_paused_session_does_not_finish(
        self, hass: HomeAssistant, init_integration: MockConfigEntry, freezer: Any
    ) -> None:
        """Pausing cancels the end-of-session update."""
        start = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_START
        )
        pause = _entity_id(
            hass, "button", init_integration, const.BUTTON_UID_SUFFIX_FOCUS_PAUSE
        )
        status = _entity_id(
            hass, "sensor", init_integration, const.SENSOR_UID_SUFFIX_FOCUS_STATUS
        )

        await _press(hass, start)
        await _press(hass, pause)

        freezer.tick(timedelta(seconds=const.FOCUS_SESSION_SECONDS + 1))
        async_fire_time_changed(hass, dt_util.utcnow())
        await hass.async_block_till_done()

        assert hass.states.get(status).state == const.FOCUS_STATE_PAUSED

    async def test_unload_cancels_end_tracking(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """Unloading the entry stops tracking the running session."""
        coordinator = get_coordinator(hass, init_integration)
        coordinator.start_focus_session()
        assert coordinator._unsub_focus_end is not None

        assert await hass.config_entries.async_unload(init_integration.entry_id)
        await hass.async_block_till_done()

        assert coordinator._unsub_focus_end is None


# =============================================================================
# Calendar
# =============================================================================


class TestCalendar:
    """Tests for the study calendar."""

    async def test_create_and_list_events(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """Events created from the calendar are stored and listed."""
        calendar = _entity_id(
        hass, "calendar", init_integration, const.CALENDAR_UID_SUFFIX
    )

        await hass.services.async_call(
            "calendar",
            "create_event",
            {
                "entity_id": calendar,
                "summary": "Chemistry lab",
                "start_date_time": "2026-06-01T14:00:00+00:00",
                "end_date_time": "2026-06-01T15:00:00+00:00",
            },
            blocking=True,
        )
        coordinator = get_coordinator(hass, init_integration)
        assert coordinator.reward_state.points == 10

        response = await hass.services.async_call(
            "calendar",
            "get_events",
            {
                "entity_id": calendar,
                "start_date_time": "2026-06-01T00:00:00+00:00",
                "end_date_time": "2026-06-02T00:00:00+00:00",
            },
            blocking=True,
            return_response=True,
        )
        events = response[calendar]["events"]
        assert [event["summary"] for event in events] == ["Chemistry lab"]

    async def test_events_outside_window_are_hidden(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """Only events overlapping the requested window are returned."""
        calendar = _entity_id(
        hass, "calendar", init_integration, const.CALENDAR_UID_SUFFIX
    )
        coordinator = get_coordinator(hass, init_integration)
        coordinator.add_event(
            "Exam", datetime.fromisoformat("2026-07-01T09:00:00+00:00")
        )

        response = await hass.services.async_call(
            "calendar",
            "get_events",
            {
                "entity_id": calendar,
                "start_date_time": "2026-06-01T00:00:00+00:00",
                "end_date_time": "2026-06-02T00:00:00+00:00",
            },
            blocking=True,
            return_response=True,
        )

        assert response[calendar]["events"] == []


# =============================================================================
# To-do list
# =============================================================================


class TestTodo:
    """Tests for the study task list."""

    async def test_add_and_complete_item(
        self, hass: HomeAssistant, init_integration: MockConfigEntry
    ) -> None:
        """To-do actions award the same points as the task services."""
        todo = _entity_id(hass, "todo", init_integration, const.TODO_UID_SUFFIX)
        coordinator = get_coordinator(hass, init_integration)

        await hass.services.async_call(
            "todo", "add_item", {"entity_id": todo, "item": "Past paper"}, blocking=True
        )
        assert coordinator.reward_state.points == 5
        assert hass.states.get(todo).state == "1"

        await hass.services.async_call(
            "todo",
            "update_item",
            {"entity_id": todo, "item": "Past paper", "status": "completed"},
            blocking=True,
        )
        assert coordinator.reward_state.tasks[0]["completed"] is True
        assert coordinator.reward_state.points == 20
        assert hass.states.get(todo).state == "0"

        response = await hass.services.async_call(
            "todo",
            "get_items",
            {"entity_id": todo, "status": ["completed"]},
            blocking=True,
            return_response=True,
        )
        assert [item["summary"] for item in response[todo]["items"]] == ["Past paper"]
