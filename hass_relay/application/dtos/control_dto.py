"""
Control DTOs - Application Layer

Parameters accepted by the registry when creating a control, and the
result it returns. Empty optional strings mean "use the kind default".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from hass_relay.domain.entities.control import OBJECT_ID_PATTERN, Control, Device


class ControlParamsDTO(BaseModel):
    """Fields shared by every control kind."""

    object_id: str = Field(
        min_length=1,
        pattern=OBJECT_ID_PATTERN,
        description="Slug used in the entity id",
    )
    name: str = Field(default="", description="Friendly name")
    unique_id: str = Field(default="", description="Hub unique id")
    icon: str = Field(default="", description="MDI icon, kind default when empty")
    state_topic: str = Field(default="", description="State topic")
    availability_topic: str = Field(default="", description="Availability topic")
    device: Optional[Device] = Field(
        default=None,
        description="Device to group under; the registry default when omitted",
    )

    model_config = ConfigDict(
        arbitrary_types_allowed=True, frozen=True, extra="forbid"
    )


class SwitchParamsDTO(ControlParamsDTO):
    command_topic: str = Field(default="", description="Command topic")
    payload_on: str = Field(default="ON", description="Payload meaning on")
    payload_off: str = Field(default="OFF", description="Payload meaning off")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"object_id": "lamp", "name": "Lamp", "unique_id": "lamp01"}
        }
    )


class NumberParamsDTO(ControlParamsDTO):
    command_topic: str = Field(default="", description="Command topic")
    min_value: float = Field(
        default=0.0, allow_inf_nan=False, description="Minimum value"
    )
    max_value: float = Field(
        default=100.0, allow_inf_nan=False, description="Maximum value"
    )
    step: float = Field(default=1.0, allow_inf_nan=False, description="Step size")
    unit: str = Field(default="", description="Unit of measurement")
    mode: str = Field(default="slider", description="Frontend input mode")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "object_id": "target_temp",
                "min_value": 5,
                "max_value": 30,
                "step": 0.5,
                "unit": "°C",
            }
        }
    )


class SensorParamsDTO(ControlParamsDTO):
    unit: str = Field(default="", description="Unit of measurement")


class BinarySensorParamsDTO(ControlParamsDTO):
    payload_on: str = Field(default="ON", description="Payload meaning on")
    payload_off: str = Field(default="OFF", description="Payload meaning off")


AnyControlParams = Union[
    SwitchParamsDTO, NumberParamsDTO, SensorParamsDTO, BinarySensorParamsDTO
]


class CreateOutcome(str, Enum):
    CREATED = "created"
    INVALID = "invalid"
    AT_CAPACITY = "at_capacity"
    ALREADY_EXISTS = "already_exists"
    PUBLISH_FAILED = "publish_failed"
    NOT_CONFIRMED = "not_confirmed"


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a create request.

    ``control`` is set only when ``outcome`` is ``CREATED``; the registry
    keeps ownership and the caller holds a reference.
    """

    outcome: CreateOutcome
    message: str = ""
    control: Optional[Control] = None

    @property
    def created(self) -> bool:
        return self.outcome is CreateOutcome.CREATED
