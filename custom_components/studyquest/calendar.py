# pyright: reportIncompatibleVariableOverride=false
# ^ Suppresses Pylance warnings about @property overriding @cached_property from base classes.
"""Calendar platform for StudyQuest integration.

Shows the stored study events. Creating an event from the calendar card
awards the same points as the add_event service; deleting removes it.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any

from homeassistant.components.calendar import (
    CalendarEntity,
    CalendarEntityFeature,
    CalendarEvent,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.util import dt as dt_util

from . import const
from .coordinator import StudyQuestDataCoordinator
from .engines.reward_engine import StudyQuestError
from .entity import StudyQuestCoordinatorEntity

if TYPE_CHECKING:
    from .type_defs import EventData

# Set to 0 (unlimited) for coordinator-based entities that don't poll
PARALLEL_UPDATES = 0


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the StudyQuest calendar platform."""
    coordinator: StudyQuestDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    async_add_entities([StudyCalendar(coordinator, entry)])


class StudyCalendar(StudyQuestCoordinatorEntity, CalendarEntity):
    """Calendar entity for the user's study events."""

    _attr_translation_key = "study_calendar"
    _attr_supported_features = (
        CalendarEntityFeature.CREATE_EVENT | CalendarEntityFeature.DELETE_EVENT
    )

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the calendar."""
        super().__init__(coordinator, entry, const.CALENDAR_UID_SUFFIX)

    @staticmethod
    def _to_calendar_event(event: EventData) -> CalendarEvent:
        start = dt_util.as_local(dt_util.parse_datetime(event["date"]))
        return CalendarEvent(
            start=start,
            end=start
            + datetime.timedelta(minutes=const.CALENDAR_EVENT_DURATION_MINUTES),
            summary=event["title"],
            uid=event["id"],
        )

    def _all_events(self) -> list[CalendarEvent]:
        events = [
            self._to_calendar_event(event)
            for event in self.coordinator.reward_state.events
        ]
        events.sort(key=lambda e: e.start_datetime_local)
        return events

    @property
    def event(self) -> CalendarEvent | None:
        """Return the current or next upcoming event."""
        now = dt_util.now()
        for event in self._all_events():
            if event.end_datetime_local > now:
                return event
        return None

    async def async_get_events(
        self,
        hass: HomeAssistant,
        start_date: datetime.datetime,
        end_date: datetime.datetime,
    ) -> list[CalendarEvent]:
        """Return events overlapping [start_date, end_date]."""
        return [
            event
            for event in self._all_events()
            if event.start_datetime_local < end_date
            and event.end_datetime_local > start_date
        ]

    async def async_create_event(self, **kwargs: Any) -> None:
        """Add an event from the calendar card.

        All-day events are stored at local midnight of their start date.
        """
        start = kwargs["dtstart"]
        if not isinstance(start, datetime.datetime):
            start = datetime.datetime.combine(
                start, datetime.time.min, tzinfo=dt_util.get_default_time_zone()
            )
        try:
            self.coordinator.add_event(kwargs.get("summary", ""), start)
        except StudyQuestError as err:
            raise HomeAssistantError(str(err)) from err

    async def async_delete_event(
        self,
        uid: str,
        recurrence_id: str | None = None,
        recurrence_range: str | None = None,
    ) -> None:
        """Delete an event by uid."""
        try:
            self.coordinator.delete_event(uid)
        except StudyQuestError as err:
            raise HomeAssistantError(str(err)) from err
