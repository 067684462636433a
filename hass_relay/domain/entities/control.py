"""Domain entities for virtual devices and the controls exposed on the hub."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

from hass_relay.domain.entities.errors import ControlValidationError
from hass_relay.domain.services.json_text import json_object, quoted
from hass_relay.shared.consts import DISCOVERY_PREFIX


class ControlKind(str, Enum):
    """Hub platform a control is registered under."""

    SWITCH = "switch"
    NUMBER = "number"
    SENSOR = "sensor"
    BINARY_SENSOR = "binary_sensor"


DEFAULT_ICONS = {
    ControlKind.SWITCH: "mdi:toggle-switch",
    ControlKind.NUMBER: "mdi:gauge",
    ControlKind.SENSOR: "mdi:gauge",
    ControlKind.BINARY_SENSOR: "mdi:motion-sensor",
}

# Kinds that accept commands from the hub and therefore carry a command topic.
COMMANDABLE_KINDS = frozenset({ControlKind.SWITCH, ControlKind.NUMBER})

# Hub object ids: lowercase letters, digits and underscores. The id is used
# verbatim in the state URL path and in the discovery topic.
OBJECT_ID_PATTERN = r"^[a-z0-9_]+$"


@dataclass(slots=True)
class Device:
    """Identity group shared by several controls.

    Controls only reference a device. The registry's default device lives
    as long as the registry; a caller-supplied device must outlive every
    control bound to it.
    """

    unique_id: str
    name: str = ""
    manufacturer: str = ""
    model: str = ""
    sw_version: str = ""

    def serialize(self) -> str:
        members: List[Tuple[str, str]] = [
            ("identifiers", f"[{quoted(self.unique_id)}]")
        ]
        for key, value in (
            ("name", self.name),
            ("manufacturer", self.manufacturer),
            ("model", self.model),
            ("sw_version", self.sw_version),
        ):
            if value:
                members.append((key, quoted(value)))
        return json_object(members)


@dataclass(frozen=True, slots=True)
class NumberOptions:
    min_value: float = 0.0
    max_value: float = 100.0
    step: float = 1.0
    unit: str = ""
    mode: str = "slider"


@dataclass(frozen=True, slots=True)
class ToggleOptions:
    payload_on: str = "ON"
    payload_off: str = "OFF"


@dataclass(frozen=True, slots=True)
class SensorOptions:
    unit: str = ""


KindOptions = Union[NumberOptions, ToggleOptions, SensorOptions]

_OPTIONS_FOR_KIND = {
    ControlKind.SWITCH: ToggleOptions,
    ControlKind.BINARY_SENSOR: ToggleOptions,
    ControlKind.NUMBER: NumberOptions,
    ControlKind.SENSOR: SensorOptions,
}


@dataclass(frozen=True, slots=True)
class ControlConfig:
    """Immutable discovery description of one control."""

    kind: ControlKind
    object_id: str
    options: KindOptions
    name: str = ""
    unique_id: str = ""
    icon: str = ""
    state_topic: str = ""
    command_topic: str = ""
    availability_topic: str = ""
    device: Optional[Device] = field(default=None, compare=False)
    discovery_prefix: str = DISCOVERY_PREFIX

    def __post_init__(self) -> None:
        if not self.object_id:
            raise ControlValidationError("Control object_id must not be empty")
        if not re.fullmatch(OBJECT_ID_PATTERN, self.object_id):
            raise ControlValidationError(
                f"Control object_id {self.object_id!r} is not a slug",
                details={"pattern": OBJECT_ID_PATTERN},
            )
        try:
            object.__setattr__(self, "kind", ControlKind(self.kind))
        except ValueError as exc:
            raise ControlValidationError(f"Unknown control kind {self.kind!r}") from exc
        expected = _OPTIONS_FOR_KIND[self.kind]
        if not isinstance(self.options, expected):
            raise ControlValidationError(
                f"{self.kind.value} controls require {expected.__name__}",
                details={"options": type(self.options).__name__},
            )
        if isinstance(self.options, NumberOptions):
            bounds = (self.options.min_value, self.options.max_value, self.options.step)
            if not all(math.isfinite(value) for value in bounds):
                raise ControlValidationError(
                    "Number min, max and step must be finite",
                    details={"bounds": [str(value) for value in bounds]},
                )

    @property
    def entity_id(self) -> str:
        return f"{self.kind.value}.{self.object_id}"

    @property
    def discovery_topic(self) -> str:
        return f"{self.discovery_prefix}/{self.kind.value}/{self.object_id}/config"

    def serialize(self) -> str:
        """Encode the discovery payload as a flat JSON object."""
        members: List[Tuple[str, str]] = []
        for key, value in (
            ("name", self.name),
            ("unique_id", self.unique_id),
            ("icon", self.icon),
            ("state_topic", self.state_topic),
            ("command_topic", self.command_topic),
            ("availability_topic", self.availability_topic),
        ):
            if value:
                members.append((key, quoted(value)))

        # A device without an identifier cannot be referenced by the hub.
        if self.device is not None and self.device.unique_id:
            members.append(("device", self.device.serialize()))

        match self.options:
            case NumberOptions(
                min_value=lo, max_value=hi, step=step, unit=unit, mode=mode
            ):
                members.append(("min", f"{lo:.3f}"))
                members.append(("max", f"{hi:.3f}"))
                members.append(("step", f"{step:.3f}"))
                if unit:
                    members.append(("unit_of_measurement", quoted(unit)))
                if mode:
                    members.append(("mode", quoted(mode)))
            case ToggleOptions(payload_on=on, payload_off=off):
                members.append(("payload_on", quoted(on)))
                members.append(("payload_off", quoted(off)))
            case SensorOptions(unit=unit):
                if unit:
                    members.append(("unit_of_measurement", quoted(unit)))

        return json_object(members)


@dataclass(slots=True)
class Control:
    """A control together with its live state on the hub.

    ``config`` is fixed once built; ``current_state`` mirrors the last value
    read from or written to the hub and ``is_online`` is the result of the
    last liveness probe.
    """

    config: ControlConfig
    current_state: str = ""
    is_online: bool = False

    @property
    def kind(self) -> ControlKind:
        return self.config.kind

    @property
    def object_id(self) -> str:
        return self.config.object_id

    @property
    def entity_id(self) -> str:
        return self.config.entity_id

    @property
    def discovery_topic(self) -> str:
        return self.config.discovery_topic

    @property
    def device(self) -> Optional[Device]:
        return self.config.device
