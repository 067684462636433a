"""Relay channel gateway implementation - Infrastructure layer."""

from __future__ import annotations

from hass_relay.domain.gateways.hass_state_gateway import IHassStateGateway
from hass_relay.domain.gateways.relay_channel_gateway import IRelayChannelGateway
from hass_relay.domain.services.json_text import extract_json_value, json_object, quoted
from hass_relay.shared import get_logger
from hass_relay.shared.consts import (
    RELAY_DATA_SLOTS,
    RELAY_READY_SENTINEL,
    RELAY_READY_SLOT,
    RELAY_SLOT_ENTITY_PREFIX,
    RELAY_SLOT_SIZE,
)

logger = get_logger(__name__)


class RelayChannelGateway(IRelayChannelGateway):
    """Relay slots backed by ``input_text`` helper entities on the hub.

    There is no locking: a publish in progress is visible to the hub-side
    decoder slot by slot, so only one publisher may use the channel at a
    time.
    """

    data_slots = RELAY_DATA_SLOTS
    ready_slot = RELAY_READY_SLOT

    def __init__(
        self,
        state_gateway: IHassStateGateway,
        *,
        slot_entity_prefix: str = RELAY_SLOT_ENTITY_PREFIX,
        slot_size: int = RELAY_SLOT_SIZE,
        ready_sentinel: str = RELAY_READY_SENTINEL,
    ) -> None:
        self._state_gateway = state_gateway
        self._slot_entity_prefix = slot_entity_prefix
        self.slot_size = slot_size
        self.ready_sentinel = ready_sentinel

    def slot_entity_id(self, index: int) -> str:
        return f"{self._slot_entity_prefix}{index}"

    async def write_slot(self, index: int, content: str) -> bool:
        if not self._valid_index(index):
            return False

        body = json_object([("state", quoted(content))])
        response = await self._state_gateway.post_state(
            self.slot_entity_id(index), body
        )
        if not response.ok:
            logger.warning(
                "relay.slot.write_failed",
                slot=index,
                status_code=response.status_code,
            )
        return response.ok

    async def read_slot(self, index: int) -> str:
        if not self._valid_index(index):
            return ""

        response = await self._state_gateway.get_state(self.slot_entity_id(index))
        if not response.ok:
            logger.warning(
                "relay.slot.read_failed",
                slot=index,
                status_code=response.status_code,
            )
            return ""
        return extract_json_value(response.body, "state")

    async def signal_ready(self) -> bool:
        return await self.write_slot(self.ready_slot, self.ready_sentinel)

    def _valid_index(self, index: int) -> bool:
        if 1 <= index <= self.ready_slot:
            return True
        logger.error("relay.slot.invalid_index", slot=index, max_slot=self.ready_slot)
        return False
