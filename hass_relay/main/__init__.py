"""
Main module - Main/Composition Root Layer

Its primary responsibilities include:
- Loading settings from the environment
- Configuring dependencies and services (Composition Root)
- Scoping the control registry to a session with the hub
"""

from .config import AppSettings, get_settings
from .container import AppContainer, get_container, hass_session, init_container

__all__ = [
    "AppSettings",
    "get_settings",
    "AppContainer",
    "init_container",
    "get_container",
    "hass_session",
]
