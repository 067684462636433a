from __future__ import annotations

import asyncio
import json

import pytest

from hass_relay.application.use_cases.discovery_use_cases import (
    ConfirmCreationUseCase,
    PublishDiscoveryUseCase,
)
from hass_relay.domain.entities.control import (
    ControlConfig,
    ControlKind,
    SensorOptions,
    ToggleOptions,
)
from hass_relay.domain.entities.errors import (
    CreationNotConfirmedError,
    PayloadTooLargeError,
)
from hass_relay.domain.entities.hass import HassResponse
from hass_relay.infrastructure.gateways.relay_channel_gateway import RelayChannelGateway

SLOTS = [f"input_text.mqtt_buffer_{index}" for index in range(1, 7)]


def _switch(name: str = "Lamp") -> ControlConfig:
    return ControlConfig(
        kind=ControlKind.SWITCH, object_id="lamp", options=ToggleOptions(), name=name
    )


def _fragment(body: str) -> str:
    raw = body[len('{"state":"') : -2]
    return raw.replace('\\"', '"').replace("\\\\", "\\")


@pytest.mark.asyncio
async def test_publish_writes_all_slots_in_order(fake_gateway) -> None:
    publisher = PublishDiscoveryUseCase(RelayChannelGateway(fake_gateway))

    assert await publisher.execute(_switch()) is True

    assert [entity_id for entity_id, _ in fake_gateway.posts] == SLOTS
    states = [_fragment(body) for _, body in fake_gateway.posts]
    assert states[1:5] == ["", "", "", ""]
    assert states[5] == "END"
    envelope = json.loads(states[0])
    assert envelope["topic"] == "homeassistant/switch/lamp/config"
    assert envelope["payload"]["name"] == "Lamp"


@pytest.mark.asyncio
async def test_publish_spreads_long_envelope_over_slots(fake_gateway) -> None:
    publisher = PublishDiscoveryUseCase(RelayChannelGateway(fake_gateway, slot_size=40))
    config = ControlConfig(
        kind=ControlKind.SENSOR,
        object_id="temperature",
        options=SensorOptions(unit="C"),
        name="Workshop temperature",
    )

    assert await publisher.execute(config) is True

    bodies = [body for _, body in fake_gateway.posts[:5]]
    fragments = [_fragment(body) for body in bodies]
    assert all(len(fragment) <= 40 for fragment in fragments)
    assert json.loads("".join(fragments))["payload"]["unit_of_measurement"] == "C"


@pytest.mark.asyncio
async def test_publish_rejects_oversized_envelope_without_writes(fake_gateway) -> None:
    publisher = PublishDiscoveryUseCase(RelayChannelGateway(fake_gateway))

    with pytest.raises(PayloadTooLargeError):
        await publisher.execute(_switch(name="x" * 1300))

    assert fake_gateway.posts == []


@pytest.mark.asyncio
async def test_publish_continues_after_failed_write(fake_gateway) -> None:
    fake_gateway.fail_posts_for.add(SLOTS[1])
    publisher = PublishDiscoveryUseCase(RelayChannelGateway(fake_gateway))

    assert await publisher.execute(_switch()) is False

    # Every slot is still attempted and earlier writes stay in place.
    assert len(fake_gateway.posts) == 6
    assert SLOTS[0] in fake_gateway.states


def test_publish_capacity(fake_gateway) -> None:
    publisher = PublishDiscoveryUseCase(RelayChannelGateway(fake_gateway))

    assert publisher.capacity == 1275


@pytest.mark.asyncio
async def test_exists_requires_non_empty_non_null_body(fake_gateway) -> None:
    confirmation = ConfirmCreationUseCase(fake_gateway)
    fake_gateway.states["switch.a"] = '{"state":"off"}'
    fake_gateway.states["switch.b"] = ""
    fake_gateway.states["switch.c"] = "null"

    assert await confirmation.exists("switch.a") is True
    assert await confirmation.exists("switch.b") is False
    assert await confirmation.exists("switch.c") is False
    assert await confirmation.exists("switch.d") is False


@pytest.mark.asyncio
async def test_confirm_finds_entity_on_second_poll(fake_gateway, fake_clock) -> None:
    answers = iter(
        [HassResponse(status_code=404), HassResponse(200, '{"state":"unknown"}')]
    )
    fake_gateway.get_handlers["switch.lamp"] = lambda: next(answers)
    confirmation = ConfirmCreationUseCase(
        fake_gateway, sleep=fake_clock.sleep, clock=fake_clock
    )

    await confirmation.execute("switch.lamp")

    assert fake_gateway.gets == ["switch.lamp", "switch.lamp"]
    assert fake_clock.sleeps == [3.0, 0.5]


@pytest.mark.asyncio
async def test_confirm_times_out(fake_gateway, fake_clock) -> None:
    confirmation = ConfirmCreationUseCase(
        fake_gateway, sleep=fake_clock.sleep, clock=fake_clock
    )

    with pytest.raises(CreationNotConfirmedError) as exc:
        await confirmation.execute("switch.lamp")

    assert exc.value.details == {"attempts": 20}
    assert fake_clock.now == pytest.approx(13.0)


@pytest.mark.asyncio
async def test_confirm_never_sleeps_past_deadline(fake_gateway, fake_clock) -> None:
    confirmation = ConfirmCreationUseCase(
        fake_gateway,
        settle_delay=0.0,
        poll_interval=0.5,
        sleep=fake_clock.sleep,
        clock=fake_clock,
    )

    with pytest.raises(CreationNotConfirmedError):
        await confirmation.execute("switch.lamp", timeout=1.25)

    assert fake_clock.sleeps == [0.0, 0.5, 0.5, 0.25]
    assert fake_clock.now == 1.25
    assert len(fake_gateway.gets) == 3


@pytest.mark.asyncio
async def test_confirm_can_be_cancelled(fake_gateway) -> None:
    confirmation = ConfirmCreationUseCase(fake_gateway, settle_delay=30.0)

    task = asyncio.create_task(confirmation.execute("switch.lamp"))
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert fake_gateway.gets == []
