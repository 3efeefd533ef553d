"""Typed failures raised by the reverse-geocoding adapter.

``mapty.usecases.error_mapping`` turns these into user-facing notices; no
layer above the adapters looks at HTTP status codes.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class ApiError(RuntimeError):
    """Place lookup failed with an unusable answer."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.url = url


class ApiClientError(ApiError):
    """The service refused the request (4xx or an ``error`` body)."""


class ApiServerError(ApiError):
    """The service failed on its side (5xx)."""


class ApiTimeoutError(ApiError):
    """No answer at all: every attempt timed out or could not connect."""


def read_payload(resp: Any) -> Any:
    """Decoded JSON body, else a short text snippet, else ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:200] or None


def error_detail(payload: Any) -> Optional[str]:
    """Reason text from a Nominatim error body.

    Nominatim answers either ``{"error": "Unable to geocode"}`` or
    ``{"error": {"code": 400, "message": "..."}}``. Plain text bodies pass
    through unchanged.
    """
    if isinstance(payload, str):
        return payload.strip() or None
    if not isinstance(payload, Mapping):
        return None
    error = payload.get("error")
    if isinstance(error, Mapping):
        error = error.get("message")
    if isinstance(error, str) and error.strip():
        return error.strip()
    return None


def describe_failure(context: str, status: int, payload: Any) -> str:
    detail = error_detail(payload)
    if detail:
        return f"{context}: {detail} (HTTP {status})"
    return f"{context}: HTTP {status}"


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "describe_failure",
    "error_detail",
    "read_payload",
]
