from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

from mapty.adapters.map_surface_mock import MapSurfaceMock
from mapty.adapters.name_resolver_mock import NameResolverMock
from mapty.adapters.position_static import StaticPosition
from mapty.adapters.storage_kv import StorageKeyValue
from mapty.app.controller import CURRENT_MARKER, AppController, AppState, ControllerHooks
from mapty.domain.entities import Position, TravelMode
from mapty.domain.factory import TravelLogFactory

_NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
_HOME = Position(10.0, 20.0)


class _Notices:
    def __init__(self) -> None:
        self.messages: List[Tuple[str, str]] = []

    def notify(self, message: str, level: str = "info") -> None:
        self.messages.append((level, message))

    def texts(self) -> List[str]:
        return [message for _, message in self.messages]


class _BrokenStore:
    def __init__(self, logs: Optional[list] = None) -> None:
        self.logs = logs or []

    def save(self, logs) -> None:
        raise OSError("quota exceeded")

    def load(self):
        raise OSError("storage disabled")

    def clear(self) -> None:
        raise OSError("storage disabled")


def _build(
    *,
    position: Optional[Position] = _HOME,
    resolver: Optional[NameResolverMock] = None,
    store: Any = None,
    mapping: Optional[Dict[str, object]] = None,
) -> SimpleNamespace:
    events: List[str] = []
    mapping = {} if mapping is None else mapping
    ctx = SimpleNamespace(
        map=MapSurfaceMock(),
        resolver=resolver or NameResolverMock(names={(1.0, 1.0): "Park"}),
        mapping=mapping,
        store=store if store is not None else StorageKeyValue(mapping),
        notices=_Notices(),
        events=events,
    )
    ctx.controller = AppController(
        map_surface=ctx.map,
        name_resolver=ctx.resolver,
        position_provider=StaticPosition(position),
        store=ctx.store,
        notifier=ctx.notices,
        factory=TravelLogFactory(now=lambda: _NOW),
        hooks=ControllerHooks(
            on_list_changed=lambda: events.append("list"),
            on_form_changed=lambda: events.append("form"),
        ),
    )
    return ctx


def _record(ctx: SimpleNamespace, lat: float, lng: float, to_place: str, **fields: str):
    controller = ctx.controller
    controller.on_map_click(lat, lng)
    controller.form.set_field("from", fields.get("from", "Home"))
    controller.form.set_field("to", to_place)
    controller.form.set_field("distance", fields.get("distance", "5"))
    controller.form.set_field("duration", fields.get("duration", "1"))
    controller.form.set_field("type", fields.get("type", "Walk"))
    return controller.submit()


def test_startup_opens_map_at_current_position() -> None:
    ctx = _build()

    async def scenario() -> None:
        await ctx.controller.start()
        await ctx.controller.tasks.drain()

    asyncio.run(scenario())

    controller = ctx.controller
    assert controller.map_ready is True
    assert controller.state is AppState.IDLE
    assert ctx.map.center == _HOME
    assert ctx.map.zoom == 9
    assert ctx.map.markers == {CURRENT_MARKER: _HOME}
    assert ctx.map.popups[CURRENT_MARKER] == "Place 10.0000, 20.0000, Earth"
    assert ctx.map.circles == [(_HOME, 2000.0)]
    assert ctx.map.handlers == [controller.on_map_click]


def test_startup_restores_persisted_logs_as_markers_and_rows() -> None:
    first = _build()

    async def create_two() -> None:
        await first.controller.start()
        _record(first, 1.0, 1.0, "Park")
        _record(first, 2.0, 2.0, "Lake")
        await first.controller.tasks.drain()

    asyncio.run(create_two())
    saved_ids = [log.id for log in first.controller.collection.all()]

    second = _build(mapping=first.mapping)

    async def reopen() -> None:
        await second.controller.start()
        await second.controller.tasks.drain()

    asyncio.run(reopen())

    assert [row.log_id for row in second.controller.log_list.rows()] == saved_ids
    assert [row.to_place for row in second.controller.log_list.rows()] == ["Park", "Lake"]
    assert set(second.map.markers) == {CURRENT_MARKER, *(f"log-{i}" for i in saved_ids)}
    assert second.map.popups[f"log-{saved_ids[0]}"] == "Park, Earth"
    assert "list" in second.events


def test_denied_position_keeps_history_but_no_map() -> None:
    seeded = _build()

    async def seed() -> None:
        await seeded.controller.start()
        _record(seeded, 1.0, 1.0, "Park")

    asyncio.run(seed())

    ctx = _build(position=None, mapping=seeded.mapping)
    asyncio.run(ctx.controller.start())

    assert ctx.controller.map_ready is False
    assert ctx.controller.state is AppState.IDLE
    assert ctx.map.center is None
    assert ctx.map.markers == {}
    assert ("negative", "Couldn't get your position") in ctx.notices.messages
    assert len(ctx.controller.collection) == 1
    assert ctx.controller.locate(ctx.controller.collection.all()[0].id) is False
    assert ctx.notices.texts()[-1] == "Map is not available."


def test_create_walk_log_end_to_end() -> None:
    ctx = _build()

    async def scenario():
        await ctx.controller.start()
        ctx.map.click(1.0, 1.0)
        assert ctx.controller.state is AppState.FORM_OPEN
        assert ctx.controller.form.visible is True
        await ctx.controller.tasks.drain()
        assert ctx.controller.form.get("to") == "Park"
        log = _record(ctx, 1.0, 1.0, "Park")
        await ctx.controller.tasks.drain()
        return log

    log = asyncio.run(scenario())
    controller = ctx.controller

    assert log is not None
    assert len(controller.collection) == 1
    assert log.mode is TravelMode.WALK
    assert controller.log_list.rows()[0].mode == "🚶‍♂️Walk"
    assert "Park" in log.description
    assert "19 October" in log.description
    assert ctx.map.markers[log.marker_key] == Position(1.0, 1.0)
    assert ctx.map.popups[log.marker_key] == "Park, Earth"
    assert controller.form.visible is False
    assert controller.form.pending is None
    assert controller.state is AppState.IDLE
    assert ctx.store.load() == [log]


def test_invalid_distance_keeps_form_open_and_collection_empty() -> None:
    ctx = _build()

    async def scenario():
        await ctx.controller.start()
        return _record(ctx, 1.0, 1.0, "Park", distance="-1")

    assert asyncio.run(scenario()) is None
    controller = ctx.controller
    assert len(controller.collection) == 0
    assert controller.state is AppState.FORM_OPEN
    assert controller.form.visible is True
    assert controller.form.get("distance") == ""
    assert controller.form.get("duration") == ""
    assert controller.form.get("to") == "Park"
    assert ctx.notices.messages[-1][0] == "warning"
    assert ctx.store.load() == []
    assert set(ctx.map.markers) == {CURRENT_MARKER}


def test_delete_all_clears_collection_record_and_markers() -> None:
    ctx = _build()

    async def scenario() -> int:
        await ctx.controller.start()
        _record(ctx, 1.0, 1.0, "Park")
        _record(ctx, 2.0, 2.0, "Lake")
        assert "travelLogs" in ctx.mapping
        return ctx.controller.delete_all()

    assert asyncio.run(scenario()) == 2
    assert len(ctx.controller.collection) == 0
    assert "travelLogs" not in ctx.mapping
    assert set(ctx.map.markers) == {CURRENT_MARKER}
    assert ctx.notices.texts()[-1] == "All travel logs deleted successfully!"

    notices_before = len(ctx.notices.messages)
    assert ctx.controller.delete_all() == 0
    assert len(ctx.notices.messages) == notices_before


def test_locate_unknown_id_reports_not_found_without_moving_map() -> None:
    ctx = _build()
    asyncio.run(ctx.controller.start())

    assert ctx.controller.locate(424242) is False
    assert ctx.map.views == []
    assert ctx.map.center == _HOME
    assert ctx.notices.messages[-1] == ("warning", "Travel log 424242 not found.")


def test_locate_and_locate_current_recenter_map() -> None:
    ctx = _build()

    async def scenario():
        await ctx.controller.start()
        return _record(ctx, 1.0, 1.0, "Park")

    log = asyncio.run(scenario())
    assert ctx.controller.locate(log.id) is True
    assert ctx.controller.locate_current() is True
    assert ctx.map.views == [(Position(1.0, 1.0), 13), (_HOME, 13)]


def test_delete_targets_the_clicked_entry_only() -> None:
    ctx = _build()

    async def scenario():
        await ctx.controller.start()
        first = _record(ctx, 1.0, 1.0, "Park")
        second = _record(ctx, 2.0, 2.0, "Lake")
        third = _record(ctx, 3.0, 3.0, "Hill")
        removed = ctx.controller.delete(second.id)
        return first, second, third, removed

    first, second, third, removed = asyncio.run(scenario())

    assert removed == second
    assert [log.id for log in ctx.controller.collection.all()] == [first.id, third.id]
    assert set(ctx.map.markers) == {CURRENT_MARKER, first.marker_key, third.marker_key}
    assert [log.id for log in ctx.store.load()] == [first.id, third.id]
    assert ctx.notices.messages[-1] == ("positive", "Your travel to Lake log is deleted successfully!")
    assert ctx.events[-1] == "list"


def test_delete_unknown_id_changes_nothing() -> None:
    ctx = _build()

    async def scenario():
        await ctx.controller.start()
        return _record(ctx, 1.0, 1.0, "Park")

    log = asyncio.run(scenario())
    assert ctx.controller.delete(log.id + 1000) is None
    assert ctx.controller.collection.all() == (log,)
    assert ctx.store.load() == [log]
    assert ctx.notices.messages[-1][0] == "warning"


def test_out_of_order_lookups_only_fill_their_own_popup() -> None:
    resolver = NameResolverMock(names={(1.0, 1.0): "Park", (2.0, 2.0): "Lake"}, manual=True)
    ctx = _build(resolver=resolver)

    async def scenario():
        await ctx.controller.start()
        first = _record(ctx, 1.0, 1.0, "Park")
        second = _record(ctx, 2.0, 2.0, "Lake")
        await asyncio.sleep(0)
        ctx.controller.delete(first.id)

        resolver.release(2.0, 2.0)
        await asyncio.sleep(0)
        assert ctx.map.popups == {second.marker_key: "Lake, Earth"}

        resolver.release(1.0, 1.0)
        resolver.release(10.0, 20.0)
        await ctx.controller.tasks.drain()
        return first, second

    first, second = asyncio.run(scenario())
    assert first.marker_key not in ctx.map.popups
    assert ctx.map.popups == {
        second.marker_key: "Lake, Earth",
        CURRENT_MARKER: "Place 10.0000, 20.0000, Earth",
    }


def test_failed_lookup_falls_back_to_coordinates() -> None:
    ctx = _build(resolver=NameResolverMock(fail=True))

    async def scenario():
        await ctx.controller.start()
        ctx.controller.on_map_click(1.0, 1.0)
        await ctx.controller.tasks.drain()
        assert ctx.controller.form.get("to") == ""
        log = _record(ctx, 1.0, 1.0, "Typed by hand")
        await ctx.controller.tasks.drain()
        return log

    log = asyncio.run(scenario())
    assert log is not None
    assert ctx.map.popups[log.marker_key] == "1.0000, 1.0000"
    assert ctx.map.popups[CURRENT_MARKER] == "10.0000, 20.0000"


def test_prefill_does_not_overwrite_typed_destination() -> None:
    resolver = NameResolverMock(names={(1.0, 1.0): "Park", (2.0, 2.0): "Lake"}, manual=True)
    ctx = _build(resolver=resolver)

    async def scenario() -> None:
        await ctx.controller.start()
        ctx.controller.on_map_click(1.0, 1.0)
        await asyncio.sleep(0)
        ctx.controller.form.set_field("to", "My own name")
        resolver.release(1.0, 1.0)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert ctx.controller.form.get("to") == "My own name"

        ctx.controller.form.set_field("to", "")
        ctx.controller.on_map_click(2.0, 2.0)
        await asyncio.sleep(0)
        resolver.release(2.0, 2.0)
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert ctx.controller.form.get("to") == "Lake"
        resolver.release(10.0, 20.0)
        await ctx.controller.tasks.drain()

    asyncio.run(scenario())


def test_save_failure_keeps_log_in_session_and_warns() -> None:
    ctx = _build(store=_BrokenStore())

    async def scenario():
        await ctx.controller.start()
        return _record(ctx, 1.0, 1.0, "Park")

    log = asyncio.run(scenario())

    assert ("warning", "Stored travel logs could not be read: storage disabled") in ctx.notices.messages
    assert log is not None
    assert ctx.controller.collection.all() == (log,)
    assert log.marker_key in ctx.map.markers
    level, message = ctx.notices.messages[-1]
    assert level == "warning"
    assert "quota exceeded" in message


def test_submit_without_location_and_cancel() -> None:
    ctx = _build()

    async def scenario() -> None:
        await ctx.controller.start()
        assert ctx.controller.submit() is None
        assert ctx.notices.messages[-1][0] == "warning"

        ctx.controller.on_map_click(1.0, 1.0)
        ctx.controller.form.set_field("from", "Home")
        ctx.controller.cancel_form()
        assert ctx.controller.state is AppState.IDLE
        assert ctx.controller.form.visible is False
        assert ctx.controller.form.get("from") == ""
        await ctx.controller.tasks.drain()

    asyncio.run(scenario())
    assert len(ctx.controller.collection) == 0


def test_click_outside_valid_coordinates_is_reported() -> None:
    ctx = _build()
    asyncio.run(ctx.controller.start())
    ctx.controller.on_map_click(95.0, 0.0)
    assert ctx.controller.state is AppState.IDLE
    assert ctx.notices.messages[-1] == ("warning", "That location is outside the map.")


def test_startup_skips_stored_entry_with_impossible_coordinates() -> None:
    seeded = _build()

    async def seed():
        await seeded.controller.start()
        return _record(seeded, 1.0, 1.0, "Park")

    kept = asyncio.run(seed())
    stored = json.loads(seeded.mapping["travelLogs"])
    stored.append(dict(stored[0], id=kept.id + 1, lat=999.0))
    seeded.mapping["travelLogs"] = json.dumps(stored)

    ctx = _build(mapping=seeded.mapping)

    async def reopen() -> None:
        await ctx.controller.start()
        await ctx.controller.tasks.drain()

    asyncio.run(reopen())

    assert ctx.controller.map_ready is True
    assert ctx.controller.collection.all() == (kept,)
    assert set(ctx.map.markers) == {CURRENT_MARKER, kept.marker_key}
