from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, List, Tuple

import pytest

from hass_relay.domain.entities.control import Device
from hass_relay.domain.entities.hass import HassResponse
from hass_relay.domain.gateways.hass_state_gateway import IHassStateGateway

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeHassStateGateway(IHassStateGateway):
    """In-memory hub state endpoint.

    ``states`` maps entity ids to raw state documents; ids absent from it
    answer 404. ``get_handlers`` overrides the answer for one entity id with
    a callable, and ``fail_posts_for`` makes writes to those ids fail.
    """

    def __init__(self) -> None:
        self.states: Dict[str, str] = {}
        self.get_handlers: Dict[str, Callable[[], HassResponse]] = {}
        self.fail_posts_for: set[str] = set()
        self.unreachable = False
        self.gets: List[str] = []
        self.posts: List[Tuple[str, str]] = []
        self.pings = 0

    @property
    def calls(self) -> int:
        return len(self.gets) + len(self.posts)

    async def get_state(self, entity_id: str) -> HassResponse:
        self.gets.append(entity_id)
        if self.unreachable:
            return HassResponse(status_code=None)
        if entity_id in self.get_handlers:
            return self.get_handlers[entity_id]()
        if entity_id in self.states:
            return HassResponse(status_code=200, body=self.states[entity_id])
        return HassResponse(status_code=404, body='{"message":"Entity not found."}')

    async def post_state(self, entity_id: str, body: str) -> HassResponse:
        self.posts.append((entity_id, body))
        if self.unreachable:
            return HassResponse(status_code=None)
        if entity_id in self.fail_posts_for:
            return HassResponse(status_code=500)
        created = entity_id not in self.states
        self.states[entity_id] = body
        return HassResponse(status_code=201 if created else 200, body=body)

    async def ping(self) -> bool:
        self.pings += 1
        return not self.unreachable


class FakeClock:
    """Monotonic clock advanced only by ``sleep``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture()
def fake_gateway() -> FakeHassStateGateway:
    return FakeHassStateGateway()


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sample_device() -> Device:
    return Device(
        unique_id="esp32-relay-01",
        name="Workshop Board",
        manufacturer="Espressif",
        model="ESP32-S3",
        sw_version="1.2.0",
    )
