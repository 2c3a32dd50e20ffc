"""Domain-specific exceptions — framework-independent."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fleet_api.domain.entities.validation import ValidationReport


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class CarrierNotFoundError(EntityNotFoundError):
    """Raised when a boat/load pair does not exist (missing entity or no such carrier link)."""

    def __init__(self, boat_id: int | str, load_id: int | str):
        self.boat_id = boat_id
        self.load_id = load_id
        self.entity_type = "Carrier"
        self.entity_id = f"{boat_id}/{load_id}"
        Exception.__init__(self, "The specified boat/load pair does not exist.")


class EntityValidationError(Exception):
    """Raised when entity data violates the rules of its kind.

    Carries the structured report so callers can point at the failing field.
    """

    def __init__(self, report: ValidationReport):
        self.report = report
        super().__init__(
            f"{report.kind} instance failed to validate with properties {report.values}"
        )


class CarrierConflictError(Exception):
    """Raised when a load that is already carried is assigned to a boat."""

    def __init__(self, load_id: int | str, carrier_id: int | str):
        self.load_id = load_id
        self.carrier_id = carrier_id
        super().__init__("The load is already loaded on another boat.")


class InvalidCursorError(ValueError):
    """Raised when a pagination cursor cannot be decoded."""

    def __init__(self, cursor: str):
        self.cursor = cursor
        super().__init__("The pagination cursor is invalid.")


class StorageError(Exception):
    """Raised for infrastructure faults in the document store.

    The message stays generic; details are logged where the fault is detected.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Storage operation '{operation}' failed")


class AuthenticationError(Exception):
    """Base class for identity verification failures."""


class MissingCredentialsError(AuthenticationError):
    """Raised when no bearer credential was supplied."""

    def __init__(self) -> None:
        super().__init__("No bearer credential was supplied.")


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer credential fails verification."""

    def __init__(self, reason: str = "The bearer credential is invalid."):
        super().__init__(reason)


class OwnershipError(Exception):
    """Raised when the authenticated user does not own the requested entity."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__("The authorized user does not have access to this endpoint.")
