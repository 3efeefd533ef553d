"""Travel log lifecycle orchestration for the map journal.

``AppController`` is the only writer of the log collection. It keeps the
collection, the map markers, the rendered list, and the durable record in
step, and turns every failure into a user notice instead of an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..domain.collection import LogCollection
from ..domain.entities import PlaceName, Position, TravelLog
from ..domain.errors import (
    DuplicateIdError,
    NotFoundError,
    PositionUnavailable,
    StorageUnavailable,
    UseCaseError,
    ValidationError,
)
from ..domain.factory import TravelLogFactory
from ..domain.ports import LogStore, MapSurface, NameResolver, Notifier, PositionProvider
from ..usecases.load_travel_logs import LoadTravelLogs
from ..usecases.resolve_place_name import ResolvePlaceName
from ..usecases.save_travel_logs import ClearTravelLogs, SaveTravelLogs
from ..viewmodels.entry_form_vm import EntryFormVM
from ..viewmodels.log_list_vm import LogListVM
from ..viewmodels.settings_vm import SettingsConfig
from .marker_tasks import MarkerTasks

CURRENT_MARKER = "current"
FORM_TASK = "form"
_LOG_MARKER_PREFIX = "log-"


class AppState(Enum):
    IDLE = "idle"
    AWAITING_POSITION = "awaiting_position"
    FORM_OPEN = "form_open"


def _noop(*_: object, **__: object) -> None:
    """Default no-op callback used for hooks."""


@dataclass
class ControllerHooks:
    """Optional callbacks the view uses to refresh its projections."""

    on_list_changed: Callable[[], None] = _noop
    on_form_changed: Callable[[], None] = _noop
    on_state_changed: Callable[[], None] = _noop

    def __post_init__(self) -> None:
        self.on_list_changed = self.on_list_changed or _noop
        self.on_form_changed = self.on_form_changed or _noop
        self.on_state_changed = self.on_state_changed or _noop


class AppController:
    """Coordinate entry creation, map markers, list rendering, and storage.

    Call chain:
        The web runtime builds one controller per browser page with injected
        map, resolver, position, storage, and notifier collaborators, awaits
        :meth:`start`, and routes every UI event to one public method.
    """

    def __init__(
        self,
        *,
        map_surface: MapSurface,
        name_resolver: NameResolver,
        position_provider: PositionProvider,
        store: LogStore,
        notifier: Notifier,
        settings: Optional[SettingsConfig] = None,
        factory: Optional[TravelLogFactory] = None,
        hooks: Optional[ControllerHooks] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.map = map_surface
        self.position_provider = position_provider
        self.notifier = notifier
        self.settings = settings or SettingsConfig()
        self.factory = factory or TravelLogFactory()
        self.hooks = hooks or ControllerHooks()

        self.collection = LogCollection()
        self.form = EntryFormVM()
        self.log_list = LogListVM(self.collection)
        self.tasks = MarkerTasks()

        self.uc_resolve = ResolvePlaceName(name_resolver)
        self.uc_load = LoadTravelLogs(store)
        self.uc_save = SaveTravelLogs(store)
        self.uc_clear = ClearTravelLogs(store)

        self.state = AppState.IDLE
        self.map_ready = False
        self.current_position: Optional[Position] = None
        self._prefilled_to = ""

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------
    async def start(self) -> None:
        """Load the history, then wait for the current position and open the map.

        A denied or failed position request leaves the session without a map;
        the persisted logs stay listed.
        """
        if self.map_ready:
            return
        self._load_persisted()
        self._set_state(AppState.AWAITING_POSITION)
        try:
            position = await self.position_provider.current_position()
        except PositionUnavailable as exc:
            self._log.warning("Position unavailable: %s", exc.message)
            self.notifier.notify(exc.message, "negative")
            self._set_state(AppState.IDLE)
            return
        self._open_map(position)
        self._set_state(AppState.IDLE)

    def _load_persisted(self) -> None:
        try:
            logs = self.uc_load()
        except StorageUnavailable as exc:
            self._log.exception("Could not read stored travel logs")
            self.notifier.notify(exc.message, "warning")
            logs = []
        self.collection.clear()
        for log in logs:
            try:
                self.collection.add(log)
            except DuplicateIdError:
                self._log.warning("Skipping stored travel log with duplicate id %s", log.id)
        self._log.info("Loaded %d travel logs", len(self.collection))
        self.hooks.on_list_changed()

    def _open_map(self, position: Position) -> None:
        self.current_position = position
        self.map.initialize(position, self.settings.default_zoom)
        self.map.add_marker(CURRENT_MARKER, position)
        self.tasks.start(CURRENT_MARKER, self._fill_popup(CURRENT_MARKER, position))
        self.map.add_circle(position, self.settings.range_radius_m)
        self.map.on_location_clicked(self.on_map_click)
        self.map_ready = True
        self._sync_markers()
        self._log.info("Map ready at %s", position.label())

    # ------------------------------------------------------------------
    # Entry form
    # ------------------------------------------------------------------
    def on_map_click(self, lat: float, lng: float) -> None:
        """Open the entry form for the clicked location and prefill the destination."""
        try:
            position = Position(float(lat), float(lng))
        except (TypeError, ValueError):
            self.notifier.notify("That location is outside the map.", "warning")
            return
        self.form.open_at(position)
        self._set_state(AppState.FORM_OPEN)
        self.hooks.on_form_changed()
        self.tasks.start(FORM_TASK, self._prefill_destination(position))

    async def _prefill_destination(self, position: Position) -> None:
        try:
            name = await self.uc_resolve(position)
        except UseCaseError as exc:
            self._log.warning("Destination prefill skipped: %s", exc.message)
            return
        if not self.form.visible or self.form.pending != position:
            return
        typed = self.form.get("to").strip()
        if typed and typed != self._prefilled_to:
            return
        self._prefilled_to = name.short_name
        self.form.set_field("to", name.short_name)
        self.hooks.on_form_changed()

    def submit(self) -> Optional[TravelLog]:
        """Validate the form and record a travel log.

        Returns:
            The created log, or ``None`` when the input was rejected (the form
            stays open with distance and duration cleared).
        """
        position = self.form.pending
        if self.state is not AppState.FORM_OPEN or position is None:
            self.notifier.notify("Click on the map to choose a location first.", "warning")
            return None
        try:
            log = self.factory.create(
                self.form.get("from"),
                self.form.get("to"),
                self.form.get("distance"),
                self.form.get("duration"),
                self.form.get("type"),
                position.lat,
                position.lng,
                taken=self.collection.ids(),
            )
        except ValidationError as exc:
            self.notifier.notify(exc.message, "warning")
            self.form.clear_numbers()
            self.hooks.on_form_changed()
            return None

        self.collection.add(log)
        self._place_marker(log)
        self.hooks.on_list_changed()
        self._close_form()
        self._persist()
        self._log.info("Recorded travel log %s to %s", log.id, log.to_place)
        return log

    def cancel_form(self) -> None:
        self._close_form()

    def _close_form(self) -> None:
        self.tasks.cancel(FORM_TASK)
        self._prefilled_to = ""
        self.form.hide()
        self._set_state(AppState.IDLE)
        self.hooks.on_form_changed()

    # ------------------------------------------------------------------
    # Locate / delete
    # ------------------------------------------------------------------
    def locate(self, log_id: int) -> bool:
        """Re-center the map on one log; unknown ids only produce a notice."""
        try:
            log = self.collection.find_by_id(log_id)
        except NotFoundError as exc:
            self.notifier.notify(exc.message, "warning")
            return False
        if not self.map_ready:
            self.notifier.notify("Map is not available.", "warning")
            return False
        self.map.set_view(log.position, self.settings.locate_zoom)
        return True

    def locate_current(self) -> bool:
        if not self.map_ready or self.current_position is None:
            self.notifier.notify("Map is not available.", "warning")
            return False
        self.map.set_view(self.current_position, self.settings.locate_zoom)
        return True

    def delete(self, log_id: int) -> Optional[TravelLog]:
        """Remove exactly the log with ``log_id`` and drop its marker."""
        try:
            removed = self.collection.remove_by_id(log_id)
        except NotFoundError as exc:
            self.notifier.notify(exc.message, "warning")
            return None
        self._persist()
        self.notifier.notify(
            f"Your travel to {removed.to_place} log is deleted successfully!", "positive"
        )
        self._sync_markers()
        self.hooks.on_list_changed()
        return removed

    def delete_all(self) -> int:
        """Remove every log from memory, storage, and the map. Returns the count."""
        count = len(self.collection)
        self.collection.clear()
        try:
            self.uc_clear()
        except StorageUnavailable as exc:
            self._log.exception("Could not clear stored travel logs")
            self.notifier.notify(exc.message, "warning")
        if count:
            self.notifier.notify("All travel logs deleted successfully!", "positive")
        self._sync_markers()
        self.hooks.on_list_changed()
        return count

    def shutdown(self) -> None:
        self.tasks.cancel_all()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _set_state(self, state: AppState) -> None:
        if state is self.state:
            return
        self._log.debug("State %s -> %s", self.state.value, state.value)
        self.state = state
        self.hooks.on_state_changed()

    def _persist(self) -> bool:
        try:
            self.uc_save(self.collection.all())
        except StorageUnavailable as exc:
            self._log.exception("Could not persist travel logs")
            self.notifier.notify(f"{exc.message} Changes last until you leave the page.", "warning")
            return False
        return True

    def _place_marker(self, log: TravelLog) -> None:
        if not self.map_ready:
            return
        self.map.add_marker(log.marker_key, log.position)
        self.tasks.start(log.marker_key, self._fill_popup(log.marker_key, log.position))

    def _sync_markers(self) -> None:
        """Make the log markers match the collection (no stale or missing pins)."""
        if not self.map_ready:
            return
        wanted = {log.marker_key: log for log in self.collection.all()}
        for key in self.map.marker_keys():
            if key.startswith(_LOG_MARKER_PREFIX) and key not in wanted:
                self.map.remove_marker(key)
        existing = set(self.map.marker_keys())
        for key, log in wanted.items():
            if key not in existing:
                self._place_marker(log)

    async def _fill_popup(self, key: str, position: Position) -> None:
        try:
            name: PlaceName = await self.uc_resolve(position)
            content = name.display_name
        except UseCaseError as exc:
            self._log.warning("Popup for %s falls back to coordinates: %s", key, exc.message)
            content = position.label()
        if key not in self.map.marker_keys():
            # marker removed while the lookup was in flight
            return
        self.map.set_popup(key, content)


__all__ = ["AppController", "AppState", "ControllerHooks", "CURRENT_MARKER", "FORM_TASK"]
