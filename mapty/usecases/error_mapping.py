"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from mapty.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    error_detail,
)
from mapty.domain.errors import NameResolutionFailure, UseCaseError


def map_api_error(exc: Exception) -> UseCaseError:
    """Map geocoding adapter exceptions to :class:`NameResolutionFailure`.

    Errors that already are ``UseCaseError`` pass through unchanged.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return NameResolutionFailure("Place lookup timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        if status == 429:
            return NameResolutionFailure("Place lookup rate limited, try again later.")
        detail = error_detail(exc.payload)
        label = f"Place lookup rejected (HTTP {status})" if status else "Place lookup rejected"
        return NameResolutionFailure(_with_detail(label, detail))
    if isinstance(exc, ApiServerError):
        return NameResolutionFailure("Place lookup service error, try again.")
    if isinstance(exc, ApiError):
        return NameResolutionFailure(str(exc))
    return NameResolutionFailure(str(exc) or "Unexpected place lookup error.")


def _with_detail(label: str, detail: Optional[str]) -> str:
    return f"{label}: {detail}" if detail else f"{label}."


__all__ = ["map_api_error"]
