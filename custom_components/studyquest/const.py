# File: const.py
"""Constants for the StudyQuest integration.

This file centralizes configuration keys, defaults, storage keys, point awards,
service names and platform identifiers for consistency across the integration.
"""

import logging

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
STUDYQUEST_TITLE = "StudyQuest"

# Integration Domain
DOMAIN = "studyquest"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.BUTTON,
    Platform.CALENDAR,
    Platform.SENSOR,
    Platform.TODO,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_MANAGER = "storage_manager"
STORAGE_KEY = "studyquest_data"
STORAGE_VERSION = 1

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_API_KEY = "api_key"
CONF_MODEL = "model"
CONF_ENDPOINT = "endpoint"

CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_ENDPOINT = "invalid_endpoint"
TRANS_KEY_ERROR_INVALID_MODEL = "invalid_model"

# ------------------------------------------------------------------------------------------------
# Durable Key-Value Store Keys
# ------------------------------------------------------------------------------------------------
DATA_POINTS = "userPoints"
DATA_LEVEL = "userLevel"
DATA_TASKS = "userTasks"
DATA_EVENTS = "userEvents"
DATA_UNLOCKED_GAMES = "unlockedGames"

# Task record fields
DATA_TASK_ID = "id"
DATA_TASK_TEXT = "text"
DATA_TASK_COMPLETED = "completed"

# Event record fields
DATA_EVENT_ID = "id"
DATA_EVENT_TITLE = "title"
DATA_EVENT_DATE = "date"

# Profile fields (identity provider)
PROFILE_SUB = "sub"
PROFILE_NAME = "name"
PROFILE_GIVEN_NAME = "given_name"
PROFILE_FAMILY_NAME = "family_name"
PROFILE_EMAIL = "email"
PROFILE_PICTURE = "picture"

# ------------------------------------------------------------------------------------------------
# Reward / Progression
# ------------------------------------------------------------------------------------------------
POINTS_PER_LEVEL = 100
DEFAULT_POINTS = 0
DEFAULT_LEVEL = 0

# Minigame ids (content ids in the unlock catalog)
GAME_TIC_TAC_TOE = "Tic-Tac-Toe"
GAME_PONG = "Pong"
GAME_FLAPPY_BIRD = "Flappy Bird"
GAME_MEMORY_MATCH = "Memory Match"
GAME_MATH_CHALLENGE = "Math Challenge"
GAME_WORD_SCRAMBLE = "Word Scramble"
GAME_QUIZ_MASTER = "Quiz Master"

# Unlock catalog: the game at index i is unlocked on reaching level i + 1
GAME_CATALOG: tuple[str, ...] = (
    GAME_TIC_TAC_TOE,
    GAME_PONG,
    GAME_FLAPPY_BIRD,
    GAME_MEMORY_MATCH,
    GAME_MATH_CHALLENGE,
    GAME_WORD_SCRAMBLE,
    GAME_QUIZ_MASTER,
)

# Point awards for productivity actions
POINTS_TASK_ADDED = 5
POINTS_TASK_COMPLETED = 15
POINTS_EVENT_ADDED = 10
POINTS_FOCUS_STARTED = 10
POINTS_FOCUS_CLAIMED = 50
POINTS_ASSISTANT_REPLY = 5

# Point awards for minigames
POINTS_TIC_TAC_TOE_WIN = 20
POINTS_MEMORY_MATCH_PAIR = 10
POINTS_MATH_CORRECT = 5
POINTS_MATH_END_MULTIPLIER = 10
POINTS_WORD_CORRECT = 5
POINTS_WORD_END_MULTIPLIER = 10
POINTS_QUIZ_CORRECT = 10
POINTS_QUIZ_END_MULTIPLIER = 20

# Point sources (for logging and reward deltas)
POINTS_SOURCE_MANUAL = "manual"
POINTS_SOURCE_TASK_ADDED = "task_added"
POINTS_SOURCE_TASK_COMPLETED = "task_completed"
POINTS_SOURCE_EVENT_ADDED = "event_added"
POINTS_SOURCE_FOCUS_STARTED = "focus_started"
POINTS_SOURCE_FOCUS_CLAIMED = "focus_claimed"
POINTS_SOURCE_ASSISTANT = "assistant"
POINTS_SOURCE_GAME = "game"

# ------------------------------------------------------------------------------------------------
# Focus Timer
# ------------------------------------------------------------------------------------------------
FOCUS_SESSION_SECONDS = 25 * 60

FOCUS_STATE_IDLE = "idle"
FOCUS_STATE_RUNNING = "running"
FOCUS_STATE_PAUSED = "paused"
FOCUS_STATE_FINISHED = "finished"

# ------------------------------------------------------------------------------------------------
# Assistant
# ------------------------------------------------------------------------------------------------
DEFAULT_ASSISTANT_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_ASSISTANT_MODEL = "mixtral-8x7b-32768"
ASSISTANT_TEMPERATURE = 0.7
ASSISTANT_MAX_TOKENS = 1024
ASSISTANT_TIMEOUT_SECONDS = 60
ASSISTANT_FALLBACK_REPLY = "I'm sorry, I couldn't generate a response."
ASSISTANT_ERROR_REPLY_FMT = "Sorry, I couldn't process your request. Error: {}"
CHAT_HISTORY_MAX = 50

CHAT_ID = "id"
CHAT_CONTENT = "content"
CHAT_IS_USER = "is_user"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_ADD_POINTS = "add_points"
SERVICE_ADD_TASK = "add_task"
SERVICE_TOGGLE_TASK = "toggle_task"
SERVICE_ADD_EVENT = "add_event"
SERVICE_DELETE_EVENT = "delete_event"
SERVICE_RECORD_GAME_OUTCOME = "record_game_outcome"
SERVICE_START_FOCUS_SESSION = "start_focus_session"
SERVICE_PAUSE_FOCUS_SESSION = "pause_focus_session"
SERVICE_CLAIM_FOCUS_SESSION = "claim_focus_session"
SERVICE_ASK_ASSISTANT = "ask_assistant"
SERVICE_SIGN_IN = "sign_in"
SERVICE_SIGN_OUT = "sign_out"

# Service fields
FIELD_AMOUNT = "amount"
FIELD_SOURCE = "source"
FIELD_TEXT = "text"
FIELD_TASK_ID = "task_id"
FIELD_TITLE = "title"
FIELD_DATE = "date"
FIELD_EVENT_ID = "event_id"
FIELD_GAME = "game"
FIELD_SCORE = "score"
FIELD_WON = "won"
FIELD_PROMPT = "prompt"
FIELD_REPLY = "reply"

# ------------------------------------------------------------------------------------------------
# Entities
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_POINTS = "_points"
SENSOR_UID_SUFFIX_LEVEL = "_level"
SENSOR_UID_SUFFIX_LEVEL_PROGRESS = "_level_progress"
SENSOR_UID_SUFFIX_UNLOCKED_GAMES = "_unlocked_games"
SENSOR_UID_SUFFIX_OPEN_TASKS = "_open_tasks"
SENSOR_UID_SUFFIX_FOCUS_STATUS = "_focus_status"
SENSOR_UID_SUFFIX_FOCUS_ENDS = "_focus_ends"
SENSOR_UID_SUFFIX_ASSISTANT = "_assistant"
SENSOR_UID_SUFFIX_PROFILE = "_profile"

BUTTON_UID_SUFFIX_FOCUS_START = "_focus_start"
BUTTON_UID_SUFFIX_FOCUS_PAUSE = "_focus_pause"
BUTTON_UID_SUFFIX_FOCUS_CLAIM = "_focus_claim"

CALENDAR_UID_SUFFIX = "_calendar"
CALENDAR_EVENT_DURATION_MINUTES = 60
TODO_UID_SUFFIX = "_tasks"

ATTR_UNLOCKED = "unlocked"
ATTR_LOCKED = "locked"
ATTR_NEXT_UNLOCK = "next_unlock"
ATTR_POINTS_TO_NEXT_LEVEL = "points_to_next_level"
ATTR_REMAINING_SECONDS = "remaining_seconds"
ATTR_HISTORY = "history"
ATTR_PROFILE = "profile"
ATTR_TOTAL_TASKS = "total_tasks"

LABEL_POINTS = "Points"
DISPLAY_UNKNOWN = "Unknown"

# ------------------------------------------------------------------------------------------------
# Messages
# ------------------------------------------------------------------------------------------------
MSG_NO_ENTRY_FOUND = "No StudyQuest entry found"
ERROR_NOT_SIGNED_IN = "No signed-in user"
