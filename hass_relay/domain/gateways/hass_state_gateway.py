"""
Home Assistant State Gateway Interface - Domain Layer

This module defines the HTTP collaborator the relay needs: read and write
access to ``/api/states/<entity_id>`` on the hub.
"""

from abc import ABC, abstractmethod

from hass_relay.domain.entities.hass import HassResponse


class IHassStateGateway(ABC):
    """Interface for the hub's entity-state endpoint."""

    @abstractmethod
    async def get_state(self, entity_id: str) -> HassResponse:
        """
        Fetch the current state document of an entity.

        Args:
            entity_id: Hub entity id (e.g. ``switch.lamp``)

        Returns:
            HassResponse: Status code and raw body. Never raises for
            transport or HTTP failures.
        """
        pass

    @abstractmethod
    async def post_state(self, entity_id: str, body: str) -> HassResponse:
        """
        Set the state of an entity.

        Args:
            entity_id: Hub entity id
            body: Pre-encoded JSON document, sent verbatim

        Returns:
            HassResponse: Status code and raw body.
        """
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return whether the hub's API answers with a 2xx status."""
        pass
