"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .hass_state_gateway import IHassStateGateway
from .relay_channel_gateway import IRelayChannelGateway

__all__ = ["IHassStateGateway", "IRelayChannelGateway"]
