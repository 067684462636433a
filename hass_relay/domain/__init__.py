"""
Domain Layer Package

This package contains the core rules of the relay: entities, their wire
encoding and the gateway contracts. It has no dependency on httpx or any
other infrastructure concern.
"""

# Re-export submodules
from hass_relay.domain import entities, gateways, services

__all__ = ["entities", "gateways", "services"]
