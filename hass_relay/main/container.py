"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dependency_injector import containers, providers

from hass_relay.application.use_cases import (
    ConfirmCreationUseCase,
    ControlRegistry,
    ControlStateUseCase,
    PublishDiscoveryUseCase,
)
from hass_relay.domain.entities.control import Device
from hass_relay.infrastructure.gateways import HassStateGateway, RelayChannelGateway
from hass_relay.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    # Settings
    config = providers.Configuration()

    # Infrastructure
    hass_state_gateway = providers.Singleton(
        HassStateGateway,
        base_url=config.hass.url,
        token=config.hass.token,
        timeout=config.hass.request_timeout,
        verify_ssl=config.hass.verify_ssl,
    )

    relay_channel_gateway = providers.Singleton(
        RelayChannelGateway,
        state_gateway=hass_state_gateway,
        slot_entity_prefix=config.relay.slot_entity_prefix,
        slot_size=config.relay.slot_size,
        ready_sentinel=config.relay.ready_sentinel,
    )

    # Domain
    default_device = providers.Singleton(
        Device,
        unique_id=config.device.unique_id,
        name=config.device.name,
        manufacturer=config.device.manufacturer,
        model=config.device.model,
        sw_version=config.device.sw_version,
    )

    # Application (use cases)
    publish_discovery_use_case = providers.Factory(
        PublishDiscoveryUseCase,
        relay_channel=relay_channel_gateway,
    )

    confirm_creation_use_case = providers.Factory(
        ConfirmCreationUseCase,
        state_gateway=hass_state_gateway,
        settle_delay=config.creation.settle_delay,
        poll_interval=config.creation.poll_interval,
        timeout=config.creation.timeout,
    )

    control_registry = providers.Singleton(
        ControlRegistry,
        publisher=publish_discovery_use_case,
        confirmation=confirm_creation_use_case,
        max_controls=config.creation.max_controls,
        default_device=default_device,
        discovery_prefix=config.relay.discovery_prefix,
    )

    control_state_use_case = providers.Factory(
        ControlStateUseCase,
        state_gateway=hass_state_gateway,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def hass_session() -> AsyncIterator[AppContainer]:
    """
    Scope the control registry to one session with the hub.

    Checks that the hub answers before handing out the container, and on
    exit releases every control the registry holds. A failed check is
    logged only: each operation reports its own connectivity failures.
    """
    container = get_container()
    gateway = container.hass_state_gateway()
    registry = container.control_registry()

    if await gateway.ping():
        logger.info("session.started", controls=len(registry))
    else:
        logger.warning("session.hub_unreachable")

    try:
        yield container
    finally:
        registry.close()
        container.control_registry.reset()
        logger.info("session.closed")
