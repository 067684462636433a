"""
Gateways Package - Infrastructure Layer

This package contains concrete implementations of the gateway
interfaces defined in the domain layer. These implementations
handle the details of talking to the hub over HTTP.
"""

from .hass_state_gateway import HassStateGateway
from .relay_channel_gateway import RelayChannelGateway

__all__ = ["HassStateGateway", "RelayChannelGateway"]
