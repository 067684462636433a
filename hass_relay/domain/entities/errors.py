"""
Domain Errors

Failures raised inside the create pipeline. The registry converts them into
a CreateResult at its boundary; they never escape a public operation.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ControlValidationError(DomainError):
    """Raised when a control definition is inconsistent."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class CapacityExceededError(DomainError):
    """Raised when the registry holds its maximum number of controls."""

    def __init__(self, capacity: int, details: Optional[Dict[str, Any]] = None):
        message = f"Registry is at capacity ({capacity} controls)"
        super().__init__(message, details)


class ControlAlreadyExistsError(DomainError):
    """Raised when the hub already has an entity with the same id."""

    def __init__(self, entity_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Control {entity_id} already exists"
        super().__init__(message, details)


class PayloadTooLargeError(DomainError):
    """Raised when an envelope does not fit in the relay slots."""

    def __init__(
        self, length: int, capacity: int, details: Optional[Dict[str, Any]] = None
    ):
        message = (
            f"Discovery envelope of {length} characters exceeds "
            f"relay capacity of {capacity}"
        )
        super().__init__(message, details)


class PublishFailedError(DomainError):
    """Raised when one or more relay slot writes failed."""

    def __init__(self, entity_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Failed to publish discovery for {entity_id}"
        super().__init__(message, details)


class CreationNotConfirmedError(DomainError):
    """Raised when the hub did not materialise the entity in time."""

    def __init__(
        self, entity_id: str, timeout: float, details: Optional[Dict[str, Any]] = None
    ):
        message = f"Control {entity_id} was not created within {timeout:g}s"
        super().__init__(message, details)
