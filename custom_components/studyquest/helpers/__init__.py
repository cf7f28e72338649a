# File: helpers/__init__.py
"""Home Assistant-bound helper functions for StudyQuest.

This module contains functions that REQUIRE Home Assistant dependencies.
Pure logic belongs in engines/.

Submodules:
    - auth_helpers: User session and profile resolution through hass.auth
    - device_helpers: DeviceInfo construction

Usage:
    from .helpers.auth_helpers import UserSession, async_resolve_profile
    from .helpers.device_helpers import create_study_device_info
"""

from . import auth_helpers, device_helpers

__all__ = [
    "auth_helpers",
    "device_helpers",
]
