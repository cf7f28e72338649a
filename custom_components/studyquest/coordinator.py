# File: coordinator.py
"""Coordinator for the StudyQuest integration.

The coordinator is the session context handed to every entity and service
handler. It owns the RewardState, the focus timer, the assistant chat log
and the user session, and turns each user action into one logical unit of
work: mutate, award points, save once, notify entities.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any
import uuid

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback
from homeassistant.helpers.event import async_track_point_in_utc_time
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from .assistant import AssistantClient, AssistantError
from .engines.game_engine import get_minigame
from .engines.timer_engine import FocusTimer
from .helpers.auth_helpers import UserSession, async_resolve_profile
from .reward_state import RewardState
from .store import StudyQuestStore

if TYPE_CHECKING:
    from .type_defs import (
        ChatMessage,
        EventData,
        GameOutcome,
        RewardDelta,
        TaskData,
        UserProfile,
    )


class StudyQuestDataCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for StudyQuest integration.

    Push-only: entities are refreshed after each mutation, nothing is polled.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        storage_manager: StudyQuestStore,
        assistant: AssistantClient,
    ) -> None:
        """Initialize the StudyQuestDataCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=None,
        )
        self.storage_manager = storage_manager
        self.assistant = assistant
        self.reward_state = RewardState(storage_manager)
        self.focus_timer = FocusTimer()
        self._unsub_focus_end: CALLBACK_TYPE | None = None
        self.session = UserSession()
        self.chat_history: list[ChatMessage] = []

    async def _async_update_data(self) -> dict[str, Any]:
        """Return the stored representation of the reward state."""
        return self.reward_state.as_dict()

    def _persist_and_update(self) -> None:
        """Save the reward state once and push the new snapshot to entities."""
        self.reward_state.save()
        self.async_set_updated_data(self.reward_state.as_dict())

    # -------------------------------------------------------------------------------------
    # Rewards
    # -------------------------------------------------------------------------------------

    def add_points(
        self, amount: int, source: str = const.POINTS_SOURCE_MANUAL
    ) -> RewardDelta:
        """Add points directly."""
        delta = self.reward_state.add_points(amount, source=source)
        if amount:
            self._persist_and_update()
        return delta

    def record_game_outcome(self, game_id: str, outcome: GameOutcome) -> RewardDelta:
        """Apply the result of a minigame round."""
        delta = get_minigame(game_id).apply_outcome(self.reward_state, outcome)
        const.LOGGER.info(
            "INFO: Game '%s' finished with score %s, awarded %s points",
            game_id,
            outcome.get("score"),
            delta["points_added"],
        )
        self._persist_and_update()
        return delta

    # -------------------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------------------

    def add_task(self, text: str) -> TaskData:
        """Add a study task and award the task bonus."""
        task = self.reward_state.add_task(text)
        self.reward_state.add_points(
            const.POINTS_TASK_ADDED, source=const.POINTS_SOURCE_TASK_ADDED
        )
        const.LOGGER.info("INFO: Task '%s' added", task["text"])
        self._persist_and_update()
        return task

    def toggle_task(self, task_id: str) -> TaskData:
        """Flip a task's completed flag; completing it awards points."""
        task = self.reward_state.toggle_task(task_id)
        if task["completed"]:
            self.reward_state.add_points(
                const.POINTS_TASK_COMPLETED, source=const.POINTS_SOURCE_TASK_COMPLETED
            )
        const.LOGGER.info(
            "INFO: Task '%s' marked %s",
            task["text"],
            "completed" if task["completed"] else "open",
        )
        self._persist_and_update()
        return task

    def set_task_completed(self, task_id: str, completed: bool) -> TaskData:
        """Toggle a task only when its completed flag differs from completed."""
        task = self.reward_state.get_task(task_id)
        if task["completed"] == completed:
            return task
        return self.toggle_task(task_id)

    # -------------------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------------------

    def add_event(self, title: str, date: datetime) -> EventData:
        """Add a calendar event and award the event bonus."""
        event = self.reward_state.add_event(title, date)
        self.reward_state.add_points(
            const.POINTS_EVENT_ADDED, source=const.POINTS_SOURCE_EVENT_ADDED
        )
        const.LOGGER.info("INFO: Event '%s' added for %s", event["title"], event["date"])
        self._persist_and_update()
        return event

    def delete_event(self, event_id: str) -> EventData:
        """Remove a calendar event."""
        event = self.reward_state.delete_event(event_id)
        const.LOGGER.info("INFO: Event '%s' deleted", event["title"])
        self._persist_and_update()
        return event

    # -------------------------------------------------------------------------------------
    # Focus timer
    # -------------------------------------------------------------------------------------

    @property
    def focus_state(self) -> str:
        """Return the focus timer state now."""
        return self.focus_timer.state(dt_util.utcnow())

    @property
    def focus_remaining(self) -> int:
        """Return the seconds left in the focus session now."""
        return self.focus_timer.remaining(dt_util.utcnow())

    @property
    def focus_ends_at(self) -> datetime | None:
        """Return when the running focus session ends."""
        return self.focus_timer.ends_at(dt_util.utcnow())

    @callback
    def _handle_focus_end(self, _now: datetime) -> None:
        """Refresh entities when the running focus session reaches its end."""
        self._unsub_focus_end = None
        const.LOGGER.debug("DEBUG: Focus session finished, ready to claim")
        self.async_update_listeners()

    def _schedule_focus_end(self) -> None:
        """Track the end of the running session."""
        self.cancel_focus_end()
        ends_at = self.focus_ends_at
        if ends_at is not None:
            self._unsub_focus_end = async_track_point_in_utc_time(
                self.hass, self._handle_focus_end, ends_at
            )

    @callback
    def cancel_focus_end(self) -> None:
        """Stop tracking the end of the focus session."""
        if self._unsub_focus_end is not None:
            self._unsub_focus_end()
            self._unsub_focus_end = None

    def start_focus_session(self) -> int:
        """Start or resume the focus session; return the points awarded."""
        awarded = self.focus_timer.start(dt_util.utcnow())
        self._schedule_focus_end()
        if awarded:
            self.reward_state.add_points(
                awarded, source=const.POINTS_SOURCE_FOCUS_STARTED
            )
            self._persist_and_update()
        else:
            self.async_update_listeners()
        const.LOGGER.info("INFO: Focus session started (%s points)", awarded)
        return awarded

    def pause_focus_session(self) -> None:
        """Pause the running focus session."""
        self.focus_timer.pause(dt_util.utcnow())
        self.cancel_focus_end()
        const.LOGGER.info(
            "INFO: Focus session paused with %s seconds left", self.focus_remaining
        )
        self.async_update_listeners()

    def claim_focus_session(self) -> RewardDelta:
        """Claim the points of a finished focus session."""
        awarded = self.focus_timer.claim(dt_util.utcnow())
        self.cancel_focus_end()
        delta = self.reward_state.add_points(
            awarded, source=const.POINTS_SOURCE_FOCUS_CLAIMED
        )
        const.LOGGER.info("INFO: Focus session claimed for %s points", awarded)
        self._persist_and_update()
        return delta

    # -------------------------------------------------------------------------------------
    # Assistant
    # -------------------------------------------------------------------------------------

    def _append_chat(self, content: str, *, is_user: bool) -> ChatMessage:
        message: ChatMessage = {
            const.CHAT_ID: str(uuid.uuid4()),
            const.CHAT_CONTENT: content,
            const.CHAT_IS_USER: is_user,
        }
        self.chat_history.append(message)
        if len(self.chat_history) > const.CHAT_HISTORY_MAX:
            del self.chat_history[: len(self.chat_history) - const.CHAT_HISTORY_MAX]
        return message

    async def async_ask_assistant(self, prompt: str) -> ChatMessage:
        """Ask the assistant and append both sides to the chat log.

        Failures are answered with an error bubble instead of raising.
        """
        self._append_chat(prompt, is_user=True)
        self.async_update_listeners()

        try:
            reply = await self.assistant.async_send_message(prompt)
        except AssistantError as err:
            const.LOGGER.warning("WARNING: Assistant request failed: %s", err)
            message = self._append_chat(
                const.ASSISTANT_ERROR_REPLY_FMT.format(err), is_user=False
            )
            self.async_update_listeners()
            return message

        message = self._append_chat(reply, is_user=False)
        self.reward_state.add_points(
            const.POINTS_ASSISTANT_REPLY, source=const.POINTS_SOURCE_ASSISTANT
        )
        self._persist_and_update()
        return message

    # -------------------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------------------

    async def async_sign_in(self, user_id: str | None) -> UserProfile | None:
        """Sign in the HA user behind user_id; failures leave the session signed out."""
        profile = await async_resolve_profile(self.hass, user_id)
        if profile is None:
            return None
        self.session.sign_in(profile)
        const.LOGGER.info("INFO: Signed in as '%s'", profile["name"])
        self.async_update_listeners()
        return profile

    def sign_out(self) -> None:
        """Clear the user session."""
        self.session.sign_out()
        const.LOGGER.info("INFO: Signed out")
        self.async_update_listeners()
