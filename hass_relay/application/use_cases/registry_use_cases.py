"""
Registry Use Cases - Application Layer

The control registry drives the create flow (capacity check, defaults,
existence pre-check, publish, confirmation) and owns every control that
made it through.
"""

from __future__ import annotations

from typing import Any, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from hass_relay.application.dtos.control_dto import (
    AnyControlParams,
    BinarySensorParamsDTO,
    CreateOutcome,
    CreateResult,
    NumberParamsDTO,
    SensorParamsDTO,
    SwitchParamsDTO,
)
from hass_relay.application.use_cases.discovery_use_cases import (
    ConfirmCreationUseCase,
    PublishDiscoveryUseCase,
)
from hass_relay.domain.entities.control import (
    COMMANDABLE_KINDS,
    DEFAULT_ICONS,
    Control,
    ControlConfig,
    ControlKind,
    Device,
    KindOptions,
    NumberOptions,
    SensorOptions,
    ToggleOptions,
)
from hass_relay.domain.entities.errors import (
    CapacityExceededError,
    ControlAlreadyExistsError,
    ControlValidationError,
    CreationNotConfirmedError,
    DomainError,
    PayloadTooLargeError,
    PublishFailedError,
)
from hass_relay.shared import get_logger
from hass_relay.shared.consts import DISCOVERY_PREFIX

logger = get_logger(__name__)

_PARAMS_FOR_KIND = {
    ControlKind.SWITCH: SwitchParamsDTO,
    ControlKind.NUMBER: NumberParamsDTO,
    ControlKind.SENSOR: SensorParamsDTO,
    ControlKind.BINARY_SENSOR: BinarySensorParamsDTO,
}

_OUTCOME_FOR_ERROR: Tuple[Tuple[type, CreateOutcome], ...] = (
    (ControlValidationError, CreateOutcome.INVALID),
    (CapacityExceededError, CreateOutcome.AT_CAPACITY),
    (ControlAlreadyExistsError, CreateOutcome.ALREADY_EXISTS),
    (PayloadTooLargeError, CreateOutcome.PUBLISH_FAILED),
    (PublishFailedError, CreateOutcome.PUBLISH_FAILED),
    (CreationNotConfirmedError, CreateOutcome.NOT_CONFIRMED),
)


def _or_default(value: str, default: str) -> str:
    return value if value else default


class ControlRegistry:
    """Append-only, capacity-bounded collection of created controls.

    There is no internal locking. Two concurrent ``create`` calls for the
    same entity id can both pass the existence pre-check, and they share the
    relay slots, so callers must serialise creation.
    """

    def __init__(
        self,
        publisher: PublishDiscoveryUseCase,
        confirmation: ConfirmCreationUseCase,
        *,
        max_controls: int = 50,
        default_device: Optional[Device] = None,
        discovery_prefix: str = DISCOVERY_PREFIX,
    ) -> None:
        if max_controls <= 0:
            raise ValueError("max_controls must be positive")
        self._publisher = publisher
        self._confirmation = confirmation
        self._max_controls = max_controls
        self._discovery_prefix = discovery_prefix
        self._default_device = default_device or Device(unique_id="")
        self._controls: List[Control] = []

    def __len__(self) -> int:
        return len(self._controls)

    def __iter__(self) -> Iterator[Control]:
        return iter(tuple(self._controls))

    @property
    def controls(self) -> Tuple[Control, ...]:
        return tuple(self._controls)

    @property
    def capacity(self) -> int:
        return self._max_controls

    @property
    def remaining(self) -> int:
        return self._max_controls - len(self._controls)

    @property
    def default_device(self) -> Device:
        return self._default_device

    def get(self, entity_id: str) -> Optional[Control]:
        for control in self._controls:
            if control.entity_id == entity_id:
                return control
        return None

    def set_device(
        self,
        unique_id: str,
        name: str,
        manufacturer: str = "",
        model: str = "",
        sw_version: str = "",
    ) -> Device:
        """Update the default device in place.

        Controls already bound to the default device see the new identity.
        """
        device = self._default_device
        device.unique_id = unique_id
        device.name = name
        device.manufacturer = manufacturer
        device.model = model
        device.sw_version = sw_version
        return device

    def close(self) -> None:
        """Release every control together with the owning session."""
        for control in self._controls:
            control.is_online = False
        logger.info("registry.closed", released=len(self._controls))
        self._controls.clear()

    async def create(
        self,
        kind: ControlKind,
        params: AnyControlParams,
        timeout: Optional[float] = None,
    ) -> CreateResult:
        """
        Register a new control on the hub.

        Args:
            kind: Platform of the control
            params: Parameters model matching ``kind``
            timeout: Confirmation timeout override in seconds

        Returns:
            CreateResult: ``CREATED`` with the control, or the failure
            outcome with a diagnostic message. The registry is unchanged on
            failure.
        """
        try:
            if len(self._controls) >= self._max_controls:
                raise CapacityExceededError(self._max_controls)

            config = self._build_config(self._resolve_kind(kind), params)
            entity_id = config.entity_id
            log = logger.bind(entity_id=entity_id)

            if await self._confirmation.exists(entity_id):
                raise ControlAlreadyExistsError(entity_id)

            if not await self._publisher.execute(config):
                raise PublishFailedError(entity_id)

            await self._confirmation.execute(entity_id, timeout)

        except DomainError as exc:
            outcome = self._outcome_for(exc)
            logger.warning(
                "registry.create.rejected",
                kind=str(getattr(kind, "value", kind)),
                object_id=getattr(params, "object_id", None),
                outcome=outcome.value,
                error=exc.message,
                **exc.details,
            )
            return CreateResult(outcome=outcome, message=exc.message)

        control = Control(config=config, is_online=True)
        self._controls.append(control)
        log.info("registry.create.completed", count=len(self._controls))
        return CreateResult(
            outcome=CreateOutcome.CREATED,
            message=f"Control {entity_id} created",
            control=control,
        )

    async def create_switch(
        self, object_id: str, timeout: Optional[float] = None, **kwargs: Any
    ) -> CreateResult:
        return await self._create_from_kwargs(
            ControlKind.SWITCH, object_id, timeout, kwargs
        )

    async def create_number(
        self, object_id: str, timeout: Optional[float] = None, **kwargs: Any
    ) -> CreateResult:
        return await self._create_from_kwargs(
            ControlKind.NUMBER, object_id, timeout, kwargs
        )

    async def create_sensor(
        self, object_id: str, timeout: Optional[float] = None, **kwargs: Any
    ) -> CreateResult:
        return await self._create_from_kwargs(
            ControlKind.SENSOR, object_id, timeout, kwargs
        )

    async def create_binary_sensor(
        self, object_id: str, timeout: Optional[float] = None, **kwargs: Any
    ) -> CreateResult:
        return await self._create_from_kwargs(
            ControlKind.BINARY_SENSOR, object_id, timeout, kwargs
        )

    async def _create_from_kwargs(
        self,
        kind: ControlKind,
        object_id: str,
        timeout: Optional[float],
        kwargs: dict,
    ) -> CreateResult:
        try:
            params = _PARAMS_FOR_KIND[kind](object_id=object_id, **kwargs)
        except ValidationError as exc:
            logger.warning(
                "registry.create.invalid_params",
                kind=kind.value,
                object_id=object_id,
                errors=exc.errors(include_url=False),
            )
            return CreateResult(
                outcome=CreateOutcome.INVALID,
                message=f"Invalid {kind.value} parameters: {exc.error_count()} error(s)",
            )
        return await self.create(kind, params, timeout=timeout)

    @staticmethod
    def _resolve_kind(kind: Any) -> ControlKind:
        try:
            return ControlKind(kind)
        except ValueError as exc:
            raise ControlValidationError(f"Unknown control kind {kind!r}") from exc

    def _build_config(
        self, kind: ControlKind, params: AnyControlParams
    ) -> ControlConfig:
        expected = _PARAMS_FOR_KIND[kind]
        if not isinstance(params, expected):
            raise ControlValidationError(
                f"{kind.value} controls require {expected.__name__}",
                details={"params": type(params).__name__},
            )

        object_id = params.object_id
        command_topic = ""
        if kind in COMMANDABLE_KINDS:
            command_topic = _or_default(
                getattr(params, "command_topic", ""), f"virt/{object_id}/set"
            )

        return ControlConfig(
            kind=kind,
            object_id=object_id,
            options=self._build_options(params),
            name=params.name,
            unique_id=params.unique_id,
            icon=_or_default(params.icon, DEFAULT_ICONS[kind]),
            state_topic=_or_default(params.state_topic, f"virt/{object_id}/state"),
            command_topic=command_topic,
            availability_topic=_or_default(
                params.availability_topic, f"virt/{object_id}/avail"
            ),
            device=params.device if params.device is not None else self._default_device,
            discovery_prefix=self._discovery_prefix,
        )

    @staticmethod
    def _build_options(params: AnyControlParams) -> KindOptions:
        match params:
            case NumberParamsDTO():
                return NumberOptions(
                    min_value=params.min_value,
                    max_value=params.max_value,
                    step=params.step,
                    unit=params.unit,
                    mode=_or_default(params.mode, "slider"),
                )
            case SwitchParamsDTO() | BinarySensorParamsDTO():
                return ToggleOptions(
                    payload_on=_or_default(params.payload_on, "ON"),
                    payload_off=_or_default(params.payload_off, "OFF"),
                )
            case SensorParamsDTO():
                return SensorOptions(unit=params.unit)
        raise ControlValidationError(f"Unsupported parameters {type(params).__name__}")

    @staticmethod
    def _outcome_for(exc: DomainError) -> CreateOutcome:
        for error_type, outcome in _OUTCOME_FOR_ERROR:
            if isinstance(exc, error_type):
                return outcome
        return CreateOutcome.INVALID
