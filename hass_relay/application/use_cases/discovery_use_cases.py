"""
Discovery Use Cases - Application Layer

Publishing a control's discovery envelope over the relay channel, and
waiting for the hub-side automation to turn it into a real entity.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable

from hass_relay.domain.entities.control import ControlConfig
from hass_relay.domain.entities.errors import CreationNotConfirmedError
from hass_relay.domain.gateways.hass_state_gateway import IHassStateGateway
from hass_relay.domain.gateways.relay_channel_gateway import IRelayChannelGateway
from hass_relay.domain.services.envelope import build_envelope, partition_envelope
from hass_relay.shared import get_logger

logger = get_logger(__name__)

# Prefix of a body the hub may return for an entity that does not exist.
MISSING_ENTITY_SENTINEL = "null"

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


class PublishDiscoveryUseCase:
    """Write a control's discovery envelope into the relay slots."""

    def __init__(self, relay_channel: IRelayChannelGateway) -> None:
        self._relay_channel = relay_channel

    @property
    def capacity(self) -> int:
        return self._relay_channel.slot_size * self._relay_channel.data_slots

    async def execute(self, config: ControlConfig) -> bool:
        """
        Publish ``config`` and raise the ready flag.

        Every slot is written even after a failed write, and writes that
        succeeded are not undone when a later one fails.

        Returns:
            bool: ``True`` only if all data slots and the ready slot were
            written.

        Raises:
            PayloadTooLargeError: If the envelope does not fit. Nothing is
                written in that case.
        """
        envelope = build_envelope(config)
        fragments = partition_envelope(
            envelope,
            self._relay_channel.slot_size,
            self._relay_channel.data_slots,
        )

        logger.info(
            "discovery.publish.started",
            entity_id=config.entity_id,
            topic=config.discovery_topic,
            envelope_length=len(envelope),
            used_slots=sum(1 for fragment in fragments if fragment),
        )

        success = True
        for index, fragment in enumerate(fragments, start=1):
            success &= await self._relay_channel.write_slot(index, fragment)
        success &= await self._relay_channel.signal_ready()

        if success:
            logger.info("discovery.publish.completed", entity_id=config.entity_id)
        else:
            logger.warning("discovery.publish.partial", entity_id=config.entity_id)
        return success


class ConfirmCreationUseCase:
    """Poll the hub until an entity exists or the deadline passes."""

    def __init__(
        self,
        state_gateway: IHassStateGateway,
        *,
        settle_delay: float = 3.0,
        poll_interval: float = 0.5,
        timeout: float = 10.0,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic,
    ) -> None:
        self._state_gateway = state_gateway
        self._settle_delay = settle_delay
        self._poll_interval = poll_interval
        self._timeout = timeout
        self._sleep = sleep
        self._clock = clock

    async def exists(self, entity_id: str) -> bool:
        """Return whether the hub currently knows ``entity_id``."""
        response = await self._state_gateway.get_state(entity_id)
        return (
            response.ok
            and len(response.body) > 0
            and not response.body.startswith(MISSING_ENTITY_SENTINEL)
        )

    async def execute(self, entity_id: str, timeout: float | None = None) -> None:
        """
        Wait for ``entity_id`` to appear on the hub.

        Sleeps the settling delay once, then checks every poll interval
        until ``timeout`` seconds have elapsed since the first check. Sleeps
        are clamped to the remaining time so the deadline is never overrun.
        Cancelling the awaiting task stops the wait at the next sleep.

        Raises:
            CreationNotConfirmedError: If the deadline passes first.
        """
        timeout = self._timeout if timeout is None else timeout

        logger.info(
            "discovery.confirm.waiting",
            entity_id=entity_id,
            settle_delay=self._settle_delay,
            timeout=timeout,
        )
        await self._sleep(self._settle_delay)

        started = self._clock()
        deadline = started + timeout
        attempts = 0
        while self._clock() < deadline:
            attempts += 1
            if await self.exists(entity_id):
                logger.info(
                    "discovery.confirm.found",
                    entity_id=entity_id,
                    attempts=attempts,
                    elapsed=round(self._clock() - started, 3),
                )
                return
            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            await self._sleep(min(self._poll_interval, remaining))

        logger.warning(
            "discovery.confirm.timeout", entity_id=entity_id, attempts=attempts
        )
        raise CreationNotConfirmedError(
            entity_id, timeout, details={"attempts": attempts}
        )
