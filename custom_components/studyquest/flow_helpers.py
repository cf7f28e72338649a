# File: flow_helpers.py
"""Helpers shared by the config and options flows.

Builds the assistant settings schema so both flows present the same form.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.helpers import selector

from . import const


def build_assistant_schema(defaults: dict[str, Any] | None = None) -> vol.Schema:
    """Build the assistant settings form.

    Args:
        defaults: Current values to pre-fill; missing keys use the integration defaults

    Returns:
        Schema with an optional API key plus model and endpoint
    """
    defaults = defaults or {}
    return vol.Schema(
        {
            vol.Optional(
                const.CONF_API_KEY,
                description={"suggested_value": defaults.get(const.CONF_API_KEY)},
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.PASSWORD)
            ),
            vol.Required(
                const.CONF_MODEL,
                default=defaults.get(const.CONF_MODEL, const.DEFAULT_ASSISTANT_MODEL),
            ): selector.TextSelector(),
            vol.Required(
                const.CONF_ENDPOINT,
                default=defaults.get(
                    const.CONF_ENDPOINT, const.DEFAULT_ASSISTANT_ENDPOINT
                ),
            ): selector.TextSelector(
                selector.TextSelectorConfig(type=selector.TextSelectorType.URL)
            ),
        }
    )


def validate_assistant_input(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate the assistant settings form.

    Returns:
        Errors dict keyed by field, empty when the input is valid
    """
    errors: dict[str, str] = {}
    endpoint = str(user_input.get(const.CONF_ENDPOINT, "")).strip()
    if not endpoint.startswith(("http://", "https://")):
        errors[const.CONF_ENDPOINT] = const.TRANS_KEY_ERROR_INVALID_ENDPOINT
    if not str(user_input.get(const.CONF_MODEL, "")).strip():
        errors[const.CONF_MODEL] = const.TRANS_KEY_ERROR_INVALID_MODEL
    return errors
