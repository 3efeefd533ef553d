"""Retrying ``requests`` transport for the geocoding adapter.

Public geocoders ask every client to identify itself, so each request
carries the configured ``User-Agent``. Timeouts and dropped connections are
retried; any HTTP answer (including 4xx/5xx) is returned to the caller, who
decides what it means.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from mapty.adapters.api_errors import ApiTimeoutError


@dataclass
class HttpConfig:
    """Per-attempt timeout, extra attempts, and client identification."""

    request_timeout_s: float = 10
    retries: int = 2
    user_agent: str = "mapty-travel-journal"


class RetryingSession:
    """GET-only wrapper around ``requests.Session``."""

    def __init__(self, cfg: HttpConfig, session: Optional[requests.Session] = None) -> None:
        self.cfg = cfg
        self.session = session or requests.Session()

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Return the first response received within ``retries + 1`` attempts.

        Raises:
            ApiTimeoutError: No attempt got an answer.
        """
        headers = {"Accept": accept, "User-Agent": self.cfg.user_agent}
        attempts = max(0, self.cfg.retries) + 1
        for attempt in range(1, attempts + 1):
            try:
                return self.session.get(
                    url,
                    params=params,
                    headers=headers,
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError) as exc:
                if attempt == attempts:
                    raise ApiTimeoutError(
                        f"No answer from {url} after {attempts} attempt(s)", url=url
                    ) from exc


__all__ = ["HttpConfig", "RetryingSession"]
