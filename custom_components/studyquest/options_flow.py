# File: options_flow.py
"""Options Flow for the StudyQuest integration.

Edits the assistant settings. Saving the options reloads the entry through
the update listener registered in async_setup_entry.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class StudyQuestOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for the assistant settings."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Show and save the assistant settings."""
        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_assistant_input(user_input)
            if not errors:
                # A cleared key must override the one from the config flow
                options = {const.CONF_API_KEY: None, **user_input}
                const.LOGGER.debug("DEBUG: Saving StudyQuest options")
                return self.async_create_entry(title="", data=options)

        current = {**self.config_entry.data, **self.config_entry.options}
        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_assistant_schema(user_input or current),
            errors=errors,
        )
