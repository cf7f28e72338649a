# pyright: reportIncompatibleVariableOverride=false
# ^ Suppresses Pylance warnings about @property overriding @cached_property from base classes.
"""To-do list platform for StudyQuest integration.

Exposes the study task list. Adding an item awards the add-task bonus and
checking an item off awards the completion bonus, exactly like the
add_task and toggle_task services.
"""

from __future__ import annotations

from homeassistant.components.todo import (
    TodoItem,
    TodoItemStatus,
    TodoListEntity,
    TodoListEntityFeature,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from . import const
from .coordinator import StudyQuestDataCoordinator
from .engines.reward_engine import StudyQuestError
from .entity import StudyQuestCoordinatorEntity

# Set to 1 (serialized) since list edits modify state
PARALLEL_UPDATES = 1


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the StudyQuest to-do platform."""
    coordinator: StudyQuestDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    async_add_entities([StudyTaskList(coordinator, entry)])


class StudyTaskList(StudyQuestCoordinatorEntity, TodoListEntity):
    """To-do list entity backed by the stored study tasks."""

    _attr_translation_key = "study_tasks"
    _attr_supported_features = (
        TodoListEntityFeature.CREATE_TODO_ITEM | TodoListEntityFeature.UPDATE_TODO_ITEM
    )

    def __init__(self, coordinator: StudyQuestDataCoordinator, entry: ConfigEntry):
        """Initialize the to-do list."""
        super().__init__(coordinator, entry, const.TODO_UID_SUFFIX)

    @property
    def todo_items(self) -> list[TodoItem]:
        """Return the tasks in insertion order."""
        return [
            TodoItem(
                summary=task["text"],
                uid=task["id"],
                status=(
                    TodoItemStatus.COMPLETED
                    if task["completed"]
                    else TodoItemStatus.NEEDS_ACTION
                ),
            )
            for task in self.coordinator.reward_state.tasks
        ]

    async def async_create_todo_item(self, item: TodoItem) -> None:
        """Add a task."""
        try:
            self.coordinator.add_task(item.summary or "")
        except StudyQuestError as err:
            raise HomeAssistantError(str(err)) from err

    async def async_update_todo_item(self, item: TodoItem) -> None:
        """Check a task off or reopen it.

        Only the status can change; task text is fixed once created.
        """
        if item.uid is None:
            raise HomeAssistantError("To-do item has no uid")
        try:
            self.coordinator.set_task_completed(
                item.uid, item.status == TodoItemStatus.COMPLETED
            )
        except StudyQuestError as err:
            raise HomeAssistantError(str(err)) from err
