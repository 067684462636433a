"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as the hub's HTTP API.
"""

from hass_relay.infrastructure import gateways

__all__ = ["gateways"]
