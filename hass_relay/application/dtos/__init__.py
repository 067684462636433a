"""
DTOs Package - Application Layer

Parameter models accepted by the registry and the results it returns.
"""

from .control_dto import (
    AnyControlParams,
    BinarySensorParamsDTO,
    ControlParamsDTO,
    CreateOutcome,
    CreateResult,
    NumberParamsDTO,
    SensorParamsDTO,
    SwitchParamsDTO,
)

__all__ = [
    "AnyControlParams",
    "ControlParamsDTO",
    "SwitchParamsDTO",
    "NumberParamsDTO",
    "SensorParamsDTO",
    "BinarySensorParamsDTO",
    "CreateOutcome",
    "CreateResult",
]
