"""
Application Layer Package

This package contains the application-specific rules of the relay. It
orchestrates the domain entities and gateway contracts to create controls
and exchange their state.
"""

# Re-export submodules
from hass_relay.application import dtos, use_cases

__all__ = ["dtos", "use_cases"]
