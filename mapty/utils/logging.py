"""Root logger setup for the journal web runtime.

``MAPTY_LOG_LEVEL`` (name or number) wins over everything else. A truthy
``MAPTY_DEBUG_LOGGING`` or ``MAPTY_DEBUG`` forces DEBUG. Without either, the
``debug_logging`` setting decides.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%H:%M:%S"
_LEVEL_VAR = "MAPTY_LOG_LEVEL"
_DEBUG_FLAGS = ("MAPTY_DEBUG_LOGGING", "MAPTY_DEBUG")
# one line per geocoding request at DEBUG otherwise
_CHATTY_LOGGERS = ("urllib3",)


def _to_level(value: Optional[str], fallback: int) -> int:
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    return candidate if isinstance(candidate, int) else fallback


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def level_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set."""
    env = os.environ if environ is None else environ
    explicit = env.get(_LEVEL_VAR)
    if explicit:
        return _to_level(explicit, logging.INFO)
    if any(_truthy(env.get(flag)) for flag in _DEBUG_FLAGS):
        return logging.DEBUG
    return None


def configure_root(default_level: int | str = logging.INFO) -> int:
    """Install a compact handler on the root logger once and set its level."""
    if isinstance(default_level, str):
        fallback = _to_level(default_level, logging.INFO)
    else:
        fallback = int(default_level)
    forced = level_from_env()
    effective = forced if forced is not None else fallback

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_FORMAT, datefmt=_DATEFMT)
    root.setLevel(effective)
    _quiet_chatty_loggers()
    return effective


def apply_preferences(debug_enabled: bool) -> int:
    """Apply the ``debug_logging`` setting unless the environment overrides it."""
    forced = level_from_env()
    if forced is not None:
        level = forced
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    return level


def env_forces_debug() -> bool:
    forced = level_from_env()
    return forced is not None and forced <= logging.DEBUG


def _quiet_chatty_loggers() -> None:
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["apply_preferences", "configure_root", "env_forces_debug", "level_from_env"]
