"""
QuickGrid Launcher - Application entry point.

Creates the launcher services, the controller and the panel window, and
wires the background catalog scan back onto the GTK main loop.

The process is single-instance. Running `quickgrid` again while it is up
re-activates the primary instance, which toggles the panel. Bind that
command to a double-tap of Command in your hotkey tool.

Usage:
  quickgrid
"""

import sys
from pathlib import Path

import gi

gi.require_version("Gdk", "4.0")
gi.require_version("Gtk", "4.0")
from gi.repository import Gdk, Gio, GLib, Gtk
from loguru import logger

from quickgrid.controller import LauncherController
from quickgrid.models import Catalog
from quickgrid.panels.grid import GridPanel
from quickgrid.services.catalog import CatalogService
from quickgrid.services.history import HistoryStore
from quickgrid.services.storage import KeyValueStore
from quickgrid.utils.helpers import HISTORY_DB_PATH, configure_logging, launch_app, load_settings

APPLICATION_ID = "io.github.quickgrid"
STYLES_DIR = Path(__file__).parent / "styles"


class QuickGridApp(Gtk.Application):
    """Single-instance host for the launcher panel."""

    def __init__(self, settings: dict):
        super().__init__(application_id=APPLICATION_ID, flags=Gio.ApplicationFlags.DEFAULT_FLAGS)
        self.settings = settings
        self.storage = None
        self.controller = None
        self.catalog_service = None
        self.panel = None

    def do_startup(self):
        Gtk.Application.do_startup(self)

        history_settings = self.settings["history"]
        scan_settings = self.settings["scan"]

        self.storage = KeyValueStore(HISTORY_DB_PATH)
        history = HistoryStore.load(self.storage, history_settings["recent_capacity"])

        self.controller = LauncherController(
            history,
            self.storage,
            launch_app,
            columns=self.settings["grid"]["columns"],
            include_frequent=history_settings["show_frequent"],
            frequent_limit=history_settings["frequent_limit"],
        )

        self.catalog_service = CatalogService(
            roots=scan_settings["roots"],
            languages=scan_settings["languages"],
            publish=self._publish_from_worker,
        )

        self._apply_css()

        self.panel = GridPanel(self.controller, self.settings, on_show=self.catalog_service.scan_async)
        self.panel.create_window(self)

        # Stay resident while the panel is hidden
        self.hold()
        logger.info("QuickGrid launcher initialized")

    def do_activate(self):
        # First run shows the panel; every later invocation toggles it
        self.toggle_visible()

    def do_shutdown(self):
        if self.storage is not None:
            self.storage.close()
        Gtk.Application.do_shutdown(self)

    def toggle_visible(self):
        self.panel.toggle_visible()

    def _publish_from_worker(self, catalog: Catalog):
        """Called on the scan thread; hand the snapshot to the main loop."""
        GLib.idle_add(self._publish_catalog, catalog)

    def _publish_catalog(self, catalog: Catalog) -> bool:
        # A newer scan finished before this callback ran
        if catalog is not self.catalog_service.catalog:
            return False
        self.controller.replace_catalog(catalog)
        return False  # Don't repeat

    def _apply_css(self):
        provider = Gtk.CssProvider()
        try:
            provider.load_from_path(str(STYLES_DIR / "main.css"))
        except GLib.Error:
            logger.exception("Could not load main.css")
            return

        display = Gdk.Display.get_default()
        if display is not None:
            Gtk.StyleContext.add_provider_for_display(
                display, provider, Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
            )


def main() -> int:
    settings = load_settings()
    configure_logging(settings["launcher"]["log_level"])

    app = QuickGridApp(settings)
    return app.run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
