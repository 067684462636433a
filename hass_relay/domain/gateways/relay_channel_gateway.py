"""
Relay Channel Gateway Interface - Domain Layer

The relay channel is a fixed set of text helper entities on the hub used as
an improvised message transport. Slots ``1..data_slots`` carry envelope
fragments; slot ``ready_slot`` carries the ready sentinel.
"""

from abc import ABC, abstractmethod


class IRelayChannelGateway(ABC):
    """Interface for reading and writing relay slots."""

    slot_size: int
    data_slots: int
    ready_slot: int
    ready_sentinel: str

    @abstractmethod
    async def write_slot(self, index: int, content: str) -> bool:
        """Write ``content`` to slot ``index``; ``False`` on any failure."""
        pass

    @abstractmethod
    async def read_slot(self, index: int) -> str:
        """Return the content of slot ``index`` or ``""`` on failure."""
        pass

    @abstractmethod
    async def signal_ready(self) -> bool:
        """Write the ready sentinel to the ready slot."""
        pass
