from __future__ import annotations

import pytest
from dependency_injector import providers

from hass_relay.domain.entities.hass import HassResponse
from hass_relay.infrastructure.gateways import HassStateGateway, RelayChannelGateway
from hass_relay.main.config import AppSettings, CreationSettings, DeviceSettings
from hass_relay.main.container import get_container, hass_session, init_container


def _settings() -> AppSettings:
    return AppSettings(
        creation=CreationSettings(settle_delay=0.0, poll_interval=0.01, timeout=1.0),
        device=DeviceSettings(unique_id="board-1", name="Board"),
    )


def test_init_and_get_container() -> None:
    container = init_container(_settings())

    assert get_container() is container
    assert isinstance(container.hass_state_gateway(), HassStateGateway)
    assert isinstance(container.relay_channel_gateway(), RelayChannelGateway)
    assert container.control_registry() is container.control_registry()
    assert container.control_registry().default_device.unique_id == "board-1"


@pytest.mark.asyncio
async def test_hass_session_creates_and_releases_controls(fake_gateway) -> None:
    container = init_container(_settings())
    container.hass_state_gateway.override(providers.Object(fake_gateway))

    original_post = fake_gateway.post_state

    async def _post_state(entity_id: str, body: str) -> HassResponse:
        response = await original_post(entity_id, body)
        if entity_id == "input_text.mqtt_buffer_6":
            fake_gateway.states["switch.lamp"] = '{"state":"off"}'
        return response

    fake_gateway.post_state = _post_state

    async with hass_session() as session:
        registry = session.control_registry()
        result = await registry.create_switch("lamp")
        assert result.created
        assert result.control.device.name == "Board"

    assert fake_gateway.pings == 1
    assert result.control.is_online is False
    assert len(registry) == 0
    assert container.control_registry() is not registry

    container.hass_state_gateway.reset_override()


@pytest.mark.asyncio
async def test_hass_session_tolerates_unreachable_hub(fake_gateway) -> None:
    container = init_container(_settings())
    fake_gateway.unreachable = True
    container.hass_state_gateway.override(providers.Object(fake_gateway))

    async with hass_session() as session:
        assert session is container

    assert fake_gateway.pings == 1
    container.hass_state_gateway.reset_override()


def test_get_container_without_init_raises(monkeypatch) -> None:
    monkeypatch.setattr("hass_relay.main.container._app_container", None)
    with pytest.raises(RuntimeError):
        get_container()
