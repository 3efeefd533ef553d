"""NiceGUI entrypoint for the travel journal web runtime."""

from __future__ import annotations

import argparse

from nicegui import app, ui

from mapty.app.controller import ControllerHooks
from mapty.utils import logging as logging_utils
from mapty.viewmodels.entry_form_vm import mode_options
from mapty.web_ui.geolocation import BrowserGeolocation
from mapty.web_ui.map_surface import LeafletMapSurface
from mapty.web_ui.runtime import WebRuntime


def _install_theme() -> None:
    """Install global CSS for the sidebar and popups."""
    ui.add_head_html(
        """
<style>
:root {
  --mapty-dark: #2d3439;
  --mapty-card: #42484d;
  --mapty-accent: #00c46a;
  --mapty-light: #ececec;
}
body { background: var(--mapty-dark); color: var(--mapty-light); }
.mapty-sidebar { background: var(--mapty-dark); min-width: 340px; max-width: 420px; }
.mapty-card {
  background: var(--mapty-card);
  border-left: 5px solid var(--mapty-accent);
  border-radius: 6px;
}
.travel-popup .leaflet-popup-content-wrapper {
  background: var(--mapty-dark);
  color: var(--mapty-light);
  border-left: 5px solid var(--mapty-accent);
}
</style>
        """
    )


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI page for the runtime."""

    @ui.page("/")
    async def index() -> None:
        hooks = ControllerHooks()

        with ui.row().classes("w-full h-screen no-wrap q-pa-none"):
            with ui.column().classes("mapty-sidebar h-full q-pa-md overflow-auto"):
                ui.label("Mapty").classes("text-h4")
                with ui.row().classes("q-gutter-sm"):
                    current_btn = ui.button("Current location", icon="my_location")
                    delete_all_btn = ui.button("Delete all", icon="delete_sweep", color="negative")
                form_card = ui.card().classes("mapty-card w-full")
                list_host = ui.column().classes("w-full q-gutter-sm")
            leaflet = ui.leaflet(center=(0.0, 0.0), zoom=2).classes("h-full grow")
            leaflet.set_visibility(False)

        controller = runtime.build_controller(
            map_surface=LeafletMapSurface(leaflet),
            position_provider=BrowserGeolocation(),
            browser_storage=app.storage.user,
            hooks=hooks,
        )
        form = controller.form

        with form_card:
            with ui.grid(columns=2).classes("w-full"):
                ui.input("From").bind_value(form.fields, "from").props("dense dark")
                to_input = ui.input("To").bind_value(form.fields, "to").props("dense dark")
                ui.select(mode_options(), label="Type").bind_value(form.fields, "type").props("dense dark")
                ui.input("Distance (km)").bind_value(form.fields, "distance").props("type=number dense dark")
                ui.input("Duration (hr)").bind_value(form.fields, "duration").props("type=number dense dark")
            with ui.row().classes("q-gutter-sm"):
                ui.button("Save", on_click=controller.submit, color="positive")
                ui.button("Cancel", on_click=controller.cancel_form).props("flat")
        form_card.bind_visibility_from(form, "visible")

        @ui.refreshable
        def render_logs() -> None:
            rows = controller.log_list.rows()
            if not rows:
                ui.label("Click on the map to record a trip.").classes("text-caption")
                return
            for row in rows:
                with ui.card().classes("mapty-card w-full q-pa-sm"):
                    ui.label(row.title).classes("text-subtitle1")
                    with ui.grid(columns=2).classes("w-full text-caption"):
                        ui.label(f"🏡 From: {row.from_place}")
                        ui.label(f"🏁 To: {row.to_place}")
                        ui.label(f"🚀 Travel by: {row.mode}")
                        ui.label(f"⏲ Distance: {row.distance}")
                        ui.label(f"⏱ Duration: {row.duration}")
                    with ui.row().classes("q-gutter-sm"):
                        ui.button(
                            "Locate",
                            icon="place",
                            on_click=lambda _, log_id=row.log_id: controller.locate(log_id),
                        ).props("dense flat")
                        ui.button(
                            "Delete",
                            icon="delete",
                            color="negative",
                            on_click=lambda _, log_id=row.log_id: controller.delete(log_id),
                        ).props("dense flat")

        with list_host:
            render_logs()

        def on_form_changed() -> None:
            if form.visible:
                to_input.run_method("focus")

        hooks.on_list_changed = render_logs.refresh
        hooks.on_form_changed = on_form_changed
        current_btn.on_click(controller.locate_current)
        delete_all_btn.on_click(controller.delete_all)

        client = ui.context.client
        client.on_disconnect(controller.shutdown)
        await client.connected()
        await controller.start()


def _parse_args() -> argparse.Namespace:
    """Command-line options for the journal server."""
    parser = argparse.ArgumentParser(description="Run the Mapty travel journal web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    return parser.parse_args()


def main() -> None:
    """Start the journal server (``mapty-web``)."""
    args = _parse_args()
    runtime = WebRuntime()
    logging_utils.configure_root()
    logging_utils.apply_preferences(runtime.settings.debug_logging)
    _install_theme()
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="Mapty",
        reload=args.reload,
        show=False,
        storage_secret=runtime.settings.storage_secret,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
