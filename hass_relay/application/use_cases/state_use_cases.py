"""
State Use Cases - Application Layer

Live state exchange with controls that the registry created.

Per control: ``Provisional -> Online`` on successful creation, then
``Online <-> Offline`` driven by ``is_online`` probes. ``write`` and
``read`` refuse to touch the hub while a control is offline.
"""

from __future__ import annotations

from typing import Optional

from hass_relay.domain.entities.control import Control
from hass_relay.domain.gateways.hass_state_gateway import IHassStateGateway
from hass_relay.domain.services.json_text import extract_json_value, json_object, quoted
from hass_relay.shared import get_logger

logger = get_logger(__name__)


class ControlStateUseCase:
    """Read, write and probe the state of created controls."""

    def __init__(self, state_gateway: IHassStateGateway) -> None:
        self._state_gateway = state_gateway

    async def write(self, control: Optional[Control], value: str) -> bool:
        """Set ``value`` as the control's state; mirror it locally on success."""
        if control is None or not control.is_online:
            logger.warning(
                "control.write.skipped",
                entity_id=control.entity_id if control else None,
                reason="missing" if control is None else "offline",
            )
            return False

        body = json_object([("state", quoted(value))])
        response = await self._state_gateway.post_state(control.entity_id, body)
        if not response.ok:
            logger.warning(
                "control.write.failed",
                entity_id=control.entity_id,
                status_code=response.status_code,
            )
            return False

        control.current_state = value
        logger.debug("control.write.completed", entity_id=control.entity_id)
        return True

    async def read(self, control: Optional[Control]) -> str:
        """Fetch the control's state from the hub and refresh the mirror.

        Returns ``""`` when the control is missing, offline or unreachable;
        the mirror is left untouched in those cases.
        """
        if control is None or not control.is_online:
            return ""

        response = await self._state_gateway.get_state(control.entity_id)
        if not response.ok:
            logger.warning(
                "control.read.failed",
                entity_id=control.entity_id,
                status_code=response.status_code,
            )
            return ""

        state = extract_json_value(response.body, "state")
        control.current_state = state
        return state

    async def is_online(self, control: Optional[Control]) -> bool:
        """Probe the hub for the control and record the result."""
        if control is None:
            return False

        response = await self._state_gateway.get_state(control.entity_id)
        online = response.ok
        if online != control.is_online:
            logger.info(
                "control.availability.changed",
                entity_id=control.entity_id,
                online=online,
                status_code=response.status_code,
            )
        control.is_online = online
        return online
