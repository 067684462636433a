"""
Domain Entities Package

This package contains the core domain entities: devices, controls and the
raw responses exchanged with the hub.
"""

from .control import (
    Control,
    ControlConfig,
    ControlKind,
    Device,
    KindOptions,
    NumberOptions,
    SensorOptions,
    ToggleOptions,
)
from .errors import (
    CapacityExceededError,
    ControlAlreadyExistsError,
    ControlValidationError,
    CreationNotConfirmedError,
    DomainError,
    PayloadTooLargeError,
    PublishFailedError,
)
from .hass import HassResponse

__all__ = [
    "Control",
    "ControlConfig",
    "ControlKind",
    "Device",
    "KindOptions",
    "NumberOptions",
    "SensorOptions",
    "ToggleOptions",
    "HassResponse",
    "DomainError",
    "ControlValidationError",
    "CapacityExceededError",
    "ControlAlreadyExistsError",
    "PayloadTooLargeError",
    "PublishFailedError",
    "CreationNotConfirmedError",
]
