"""Error taxonomy raised by the service layer."""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for failures the API layer knows how to report."""


class EntityNotFoundError(ServiceError):
    """Raised when an identifier is absent from the store."""

    def __init__(self, entity: str, identifier: int) -> None:
        super().__init__(f"{entity} not found with id: {identifier}")
        self.entity = entity
        self.identifier = identifier


class InvalidFieldReferenceError(ServiceError):
    """Raised when a patch names a field the record type does not have."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Unknown field: {field}")
        self.field = field


class ImmutableFieldError(InvalidFieldReferenceError):
    """Raised when a patch targets a field that may not be overwritten."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Field cannot be patched: {field}")


class InvalidFieldValueError(ServiceError):
    """Raised when a patch value has the wrong shape for its field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class FilterConfigurationError(RuntimeError):
    """Raised when a filter key maps to a field path the schema does not have."""


__all__ = [
    "EntityNotFoundError",
    "FilterConfigurationError",
    "ImmutableFieldError",
    "InvalidFieldReferenceError",
    "InvalidFieldValueError",
    "ServiceError",
]
