"""Discovery envelope encoding and slot partitioning."""

from typing import List

from hass_relay.domain.entities.control import ControlConfig
from hass_relay.domain.entities.errors import PayloadTooLargeError
from hass_relay.domain.services.json_text import json_object, quoted


def build_envelope(config: ControlConfig) -> str:
    """Wrap a control's discovery payload with the topic it belongs on."""
    return json_object(
        [
            ("topic", quoted(config.discovery_topic)),
            ("payload", config.serialize()),
        ]
    )


def partition_envelope(envelope: str, slot_size: int, slot_count: int) -> List[str]:
    """Split ``envelope`` into exactly ``slot_count`` fragments.

    Fragment ``i`` holds ``envelope[i*slot_size:(i+1)*slot_size]``; fragments
    past the end are empty so stale content from an earlier publish is
    overwritten. Joining the fragments gives back the envelope.

    Raises:
        PayloadTooLargeError: If the envelope needs more than ``slot_count``
            fragments.
    """
    if slot_size <= 0:
        raise ValueError("slot_size must be positive")

    capacity = slot_size * slot_count
    if len(envelope) > capacity:
        raise PayloadTooLargeError(
            len(envelope),
            capacity,
            details={"slot_size": slot_size, "slot_count": slot_count},
        )

    return [
        envelope[index * slot_size : (index + 1) * slot_size]
        for index in range(slot_count)
    ]
