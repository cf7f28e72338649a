# File: config_flow.py
"""Config flow for the StudyQuest integration.

A single step collects the assistant settings. Only one StudyQuest entry can
exist, since it owns the one durable study state.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import StudyQuestOptionsFlowHandler


class StudyQuestConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for StudyQuest."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Collect assistant settings and create the entry."""
        if self._async_current_entries():
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_assistant_input(user_input)
            if not errors:
                const.LOGGER.info("INFO: Creating StudyQuest entry")
                return self.async_create_entry(
                    title=const.STUDYQUEST_TITLE, data=user_input
                )

        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_assistant_schema(user_input),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return StudyQuestOptionsFlowHandler()
