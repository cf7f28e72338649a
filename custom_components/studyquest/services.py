# File: services.py
"""Defines custom services for the StudyQuest integration.

These services allow direct actions through scripts, automations and the
dashboard: adding points, managing tasks and events, recording minigame
results, driving the focus timer, asking the assistant and signing in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import StudyQuestDataCoordinator
from .engines.reward_engine import StudyQuestError

if TYPE_CHECKING:
    from .type_defs import GameOutcome

# --- Service Schemas ---
ADD_POINTS_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_AMOUNT): vol.All(vol.Coerce(int), vol.Range(min=0)),
        vol.Optional(const.FIELD_SOURCE, default=const.POINTS_SOURCE_MANUAL): cv.string,
    }
)

ADD_TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TEXT): cv.string,
    }
)

TOGGLE_TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TASK_ID): cv.string,
    }
)

ADD_EVENT_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Required(const.FIELD_DATE): cv.datetime,
    }
)

DELETE_EVENT_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_EVENT_ID): cv.string,
    }
)

RECORD_GAME_OUTCOME_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_GAME): vol.In(const.GAME_CATALOG),
        vol.Optional(const.FIELD_SCORE, default=0): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional(const.FIELD_WON, default=False): cv.boolean,
    }
)

ASK_ASSISTANT_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_PROMPT): cv.string,
    }
)

EMPTY_SCHEMA = vol.Schema({})


def _get_coordinator(hass: HomeAssistant, action: str) -> StudyQuestDataCoordinator:
    """Return the coordinator of the first loaded StudyQuest entry."""
    entries = hass.data.get(const.DOMAIN, {})
    if not entries:
        const.LOGGER.warning("WARNING: %s: %s", action, const.MSG_NO_ENTRY_FOUND)
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    entry_data = next(iter(entries.values()))
    return entry_data[const.COORDINATOR]


def async_setup_services(hass: HomeAssistant):
    """Register StudyQuest services."""

    async def handle_add_points(call: ServiceCall) -> ServiceResponse:
        """Handle adding points directly."""
        coordinator = _get_coordinator(hass, "Add Points")
        amount = call.data[const.FIELD_AMOUNT]
        source = call.data[const.FIELD_SOURCE]

        try:
            delta = coordinator.add_points(amount, source=source)
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Add Points: %s", err)
            raise HomeAssistantError(str(err)) from err

        const.LOGGER.info("INFO: Added %s points from '%s'", amount, source)
        return dict(delta)

    async def handle_add_task(call: ServiceCall) -> ServiceResponse:
        """Handle adding a study task."""
        coordinator = _get_coordinator(hass, "Add Task")
        try:
            task = coordinator.add_task(call.data[const.FIELD_TEXT])
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Add Task: %s", err)
            raise HomeAssistantError(str(err)) from err
        return dict(task)

    async def handle_toggle_task(call: ServiceCall) -> ServiceResponse:
        """Handle toggling a task's completed flag."""
        coordinator = _get_coordinator(hass, "Toggle Task")
        try:
            task = coordinator.toggle_task(call.data[const.FIELD_TASK_ID])
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Toggle Task: %s", err)
            raise HomeAssistantError(str(err)) from err
        return dict(task)

    async def handle_add_event(call: ServiceCall) -> ServiceResponse:
        """Handle adding a calendar event."""
        coordinator = _get_coordinator(hass, "Add Event")
        try:
            event = coordinator.add_event(
                call.data[const.FIELD_TITLE], call.data[const.FIELD_DATE]
            )
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Add Event: %s", err)
            raise HomeAssistantError(str(err)) from err
        return dict(event)

    async def handle_delete_event(call: ServiceCall) -> None:
        """Handle deleting a calendar event."""
        coordinator = _get_coordinator(hass, "Delete Event")
        try:
            coordinator.delete_event(call.data[const.FIELD_EVENT_ID])
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Delete Event: %s", err)
            raise HomeAssistantError(str(err)) from err

    async def handle_record_game_outcome(call: ServiceCall) -> ServiceResponse:
        """Handle the result of a finished minigame round."""
        coordinator = _get_coordinator(hass, "Record Game Outcome")
        game_id = call.data[const.FIELD_GAME]
        outcome: GameOutcome = {
            "score": call.data[const.FIELD_SCORE],
            "won": call.data[const.FIELD_WON],
        }
        try:
            delta = coordinator.record_game_outcome(game_id, outcome)
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Record Game Outcome: %s", err)
            raise HomeAssistantError(str(err)) from err
        return dict(delta)

    async def handle_start_focus_session(call: ServiceCall) -> None:
        """Handle starting or resuming the focus timer."""
        coordinator = _get_coordinator(hass, "Start Focus Session")
        try:
            coordinator.start_focus_session()
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Start Focus Session: %s", err)
            raise HomeAssistantError(str(err)) from err

    async def handle_pause_focus_session(call: ServiceCall) -> None:
        """Handle pausing the focus timer."""
        coordinator = _get_coordinator(hass, "Pause Focus Session")
        try:
            coordinator.pause_focus_session()
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Pause Focus Session: %s", err)
            raise HomeAssistantError(str(err)) from err

    async def handle_claim_focus_session(call: ServiceCall) -> ServiceResponse:
        """Handle claiming a finished focus session."""
        coordinator = _get_coordinator(hass, "Claim Focus Session")
        try:
            delta = coordinator.claim_focus_session()
        except StudyQuestError as err:
            const.LOGGER.warning("WARNING: Claim Focus Session: %s", err)
            raise HomeAssistantError(str(err)) from err
        return dict(delta)

    async def handle_ask_assistant(call: ServiceCall) -> ServiceResponse:
        """Handle a prompt for the chat assistant."""
        coordinator = _get_coordinator(hass, "Ask Assistant")
        message = await coordinator.async_ask_assistant(call.data[const.FIELD_PROMPT])
        return {const.FIELD_REPLY: message["content"]}

    async def handle_sign_in(call: ServiceCall) -> ServiceResponse:
        """Handle signing in the calling Home Assistant user."""
        coordinator = _get_coordinator(hass, "Sign In")
        profile = await coordinator.async_sign_in(call.context.user_id)
        if profile is None:
            raise HomeAssistantError(const.ERROR_NOT_SIGNED_IN)
        return dict(profile)

    async def handle_sign_out(call: ServiceCall) -> None:
        """Handle signing out."""
        coordinator = _get_coordinator(hass, "Sign Out")
        coordinator.sign_out()

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_POINTS,
        handle_add_points,
        schema=ADD_POINTS_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_TASK,
        handle_add_task,
        schema=ADD_TASK_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_TOGGLE_TASK,
        handle_toggle_task,
        schema=TOGGLE_TASK_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_EVENT,
        handle_add_event,
        schema=ADD_EVENT_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_DELETE_EVENT,
        handle_delete_event,
        schema=DELETE_EVENT_SCHEMA,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RECORD_GAME_OUTCOME,
        handle_record_game_outcome,
        schema=RECORD_GAME_OUTCOME_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_START_FOCUS_SESSION,
        handle_start_focus_session,
        schema=EMPTY_SCHEMA,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_PAUSE_FOCUS_SESSION,
        handle_pause_focus_session,
        schema=EMPTY_SCHEMA,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CLAIM_FOCUS_SESSION,
        handle_claim_focus_session,
        schema=EMPTY_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ASK_ASSISTANT,
        handle_ask_assistant,
        schema=ASK_ASSISTANT_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SIGN_IN,
        handle_sign_in,
        schema=EMPTY_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_SIGN_OUT,
        handle_sign_out,
        schema=EMPTY_SCHEMA,
    )

    const.LOGGER.info("INFO: StudyQuest services have been registered successfully")


async def async_unload_services(hass: HomeAssistant):
    """Unregister StudyQuest services when unloading the integration."""
    services = [
        const.SERVICE_ADD_POINTS,
        const.SERVICE_ADD_TASK,
        const.SERVICE_TOGGLE_TASK,
        const.SERVICE_ADD_EVENT,
        const.SERVICE_DELETE_EVENT,
        const.SERVICE_RECORD_GAME_OUTCOME,
        const.SERVICE_START_FOCUS_SESSION,
        const.SERVICE_PAUSE_FOCUS_SESSION,
        const.SERVICE_CLAIM_FOCUS_SESSION,
        const.SERVICE_ASK_ASSISTANT,
        const.SERVICE_SIGN_IN,
        const.SERVICE_SIGN_OUT,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: StudyQuest services have been unregistered")
