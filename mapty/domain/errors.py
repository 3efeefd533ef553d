"""Domain-level error types shared by use cases, adapters, and the controller.

Every error is a :class:`UseCaseError` carrying a stable ``code`` and a
user-presentable ``message`` so the controller can surface it as a notice
without knowing where it was raised.
"""

from __future__ import annotations

from typing import Iterable, Tuple


class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ValidationError(UseCaseError):
    """Raw entry input was rejected before any travel log was built."""

    def __init__(self, fields: Iterable[str], message: str = "") -> None:
        self.fields: Tuple[str, ...] = tuple(fields)
        text = message or f"Invalid value for: {', '.join(self.fields)}."
        super().__init__("INVALID_INPUT", text)


class NotFoundError(UseCaseError):
    """No travel log with the requested id exists in the collection."""

    def __init__(self, log_id: int) -> None:
        self.log_id = log_id
        super().__init__("NOT_FOUND", f"Travel log {log_id} not found.")


class DuplicateIdError(UseCaseError):
    """A travel log with the same id is already part of the collection."""

    def __init__(self, log_id: int) -> None:
        self.log_id = log_id
        super().__init__("DUPLICATE_ID", f"Travel log {log_id} already exists.")


class PositionUnavailable(UseCaseError):
    def __init__(self, message: str = "Couldn't get your position") -> None:
        super().__init__("POSITION_UNAVAILABLE", message)


class NameResolutionFailure(UseCaseError):
    def __init__(self, message: str = "Place name lookup failed.") -> None:
        super().__init__("NAME_RESOLUTION_FAILED", message)


class StorageUnavailable(UseCaseError):
    def __init__(self, message: str = "Travel logs could not be stored.") -> None:
        super().__init__("STORAGE_UNAVAILABLE", message)


__all__ = [
    "DuplicateIdError",
    "NameResolutionFailure",
    "NotFoundError",
    "PositionUnavailable",
    "StorageUnavailable",
    "UseCaseError",
    "ValidationError",
]
