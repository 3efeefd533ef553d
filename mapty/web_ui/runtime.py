"""NiceGUI runtime orchestration for the travel journal.

This module composes settings, adapters, and one ``AppController`` per
browser page for the web runtime.
"""

from __future__ import annotations

import logging
from typing import MutableMapping, Optional

from nicegui import ui

from mapty.adapters.nominatim import NominatimResolver
from mapty.adapters.storage_kv import StorageKeyValue
from mapty.adapters.storage_local import StorageLocal
from mapty.app.controller import AppController, ControllerHooks
from mapty.domain.ports import LogStore, MapSurface, PositionProvider
from mapty.viewmodels.settings_vm import SettingsConfig


LOGGER = logging.getLogger(__name__)


class UiNotifier:
    """Render controller notices as NiceGUI toasts."""

    def notify(self, message: str, level: str = "info") -> None:
        ui.notify(message, type=level, close_button="OK" if level == "negative" else False)


class WebRuntime:
    """Process-wide wiring shared by every page."""

    def __init__(self, settings: Optional[SettingsConfig] = None) -> None:
        self.settings = settings or SettingsConfig.from_env()
        self.resolver = NominatimResolver(
            base_url=self.settings.nominatim_url,
            cfg=self.settings.http_config(),
        )

    def build_store(self, browser_storage: MutableMapping[str, object]) -> LogStore:
        if self.settings.storage_backend == "file":
            return StorageLocal(root_dir=self.settings.storage_root)
        return StorageKeyValue(browser_storage, key=self.settings.storage_key)

    def build_controller(
        self,
        *,
        map_surface: MapSurface,
        position_provider: PositionProvider,
        browser_storage: MutableMapping[str, object],
        hooks: Optional[ControllerHooks] = None,
    ) -> AppController:
        LOGGER.debug("Building controller with %s storage", self.settings.storage_backend)
        return AppController(
            map_surface=map_surface,
            name_resolver=self.resolver,
            position_provider=position_provider,
            store=self.build_store(browser_storage),
            notifier=UiNotifier(),
            settings=self.settings,
            hooks=hooks,
        )


__all__ = ["UiNotifier", "WebRuntime"]
