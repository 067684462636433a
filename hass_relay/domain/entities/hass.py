"""Domain entities describing raw exchanges with the hub's state endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class HassResponse:
    """Outcome of one request against ``/api/states/<entity_id>``.

    ``status_code`` is ``None`` when no response was received (connection
    refused, DNS failure, timeout).
    """

    status_code: Optional[int]
    body: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300

    @property
    def reached_hub(self) -> bool:
        return self.status_code is not None
