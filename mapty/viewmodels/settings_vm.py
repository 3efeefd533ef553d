from __future__ import annotations

import os
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping, Optional

from ..adapters.http_client import HttpConfig
from ..adapters.nominatim import DEFAULT_BASE_URL
from ..adapters.storage_kv import DEFAULT_KEY
from ..utils.logging import env_forces_debug

STORAGE_BACKENDS: tuple[str, ...] = ("browser", "file")
_ENV_PREFIX = "MAPTY_"


@dataclass(frozen=True)
class SettingsConfig:
    """Typed runtime settings, overridable through ``MAPTY_*`` variables."""

    storage_backend: str = "browser"
    storage_root: str = "."
    storage_key: str = DEFAULT_KEY
    storage_secret: str = "mapty-travel-journal"
    nominatim_url: str = DEFAULT_BASE_URL
    user_agent: str = "mapty-travel-journal"
    request_timeout_s: float = 10.0
    retries: int = 2
    default_zoom: int = 9
    locate_zoom: int = 13
    range_radius_m: float = 2000.0
    debug_logging: bool = False

    def __post_init__(self) -> None:
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}."
            )
        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be positive.")
        if self.retries < 0:
            raise ValueError("retries must not be negative.")
        for name in ("default_zoom", "locate_zoom"):
            value = getattr(self, name)
            if not 0 <= value <= 19:
                raise ValueError(f"{name} must be within [0, 19].")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SettingsConfig":
        """Build settings from environment variables, falling back to defaults.

        Every field maps to ``MAPTY_<FIELD>`` (``MAPTY_STORAGE_ROOT``,
        ``MAPTY_NOMINATIM_URL``, ...). ``MAPTY_DEBUG`` style log overrides
        also switch on ``debug_logging``.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        values: Dict[str, Any] = {}
        for name, default in asdict(defaults).items():
            raw = env.get(_ENV_PREFIX + name.upper())
            if raw is None or not raw.strip():
                continue
            values[name] = _coerce(name, raw.strip(), default)
        if "debug_logging" not in values and env is os.environ:
            values["debug_logging"] = env_forces_debug()
        return replace(defaults, **values)

    def http_config(self) -> HttpConfig:
        return HttpConfig(
            request_timeout_s=self.request_timeout_s,
            retries=self.retries,
            user_agent=self.user_agent,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(name: str, raw: str, default: Any) -> Any:
    if isinstance(default, bool):
        return raw.lower() in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{_ENV_PREFIX}{name.upper()} must be an integer.") from exc
    if isinstance(default, float):
        try:
            return float(raw)
        except ValueError as exc:
            raise ValueError(f"{_ENV_PREFIX}{name.upper()} must be a number.") from exc
    return raw


__all__ = ["STORAGE_BACKENDS", "SettingsConfig"]
