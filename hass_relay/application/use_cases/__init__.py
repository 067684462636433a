"""
Use Cases Package - Application Layer

This package contains the use cases that orchestrate the relay: publishing
discovery envelopes, confirming creation, owning created controls and
exchanging their live state.
"""

from .discovery_use_cases import ConfirmCreationUseCase, PublishDiscoveryUseCase
from .registry_use_cases import ControlRegistry
from .state_use_cases import ControlStateUseCase

__all__ = [
    "PublishDiscoveryUseCase",
    "ConfirmCreationUseCase",
    "ControlRegistry",
    "ControlStateUseCase",
]
