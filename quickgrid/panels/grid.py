"""
Grid Panel - The launcher window: search entry above a sectioned app grid.

Features:
- Search entry that keeps keyboard focus while the panel is open
- One grid per section (Recent / All Applications / Search Results)
- Arrow keys move the highlight, Enter launches, Escape hides
- Click to launch
- Clears the search term when hidden, rescans when shown

All state lives in LauncherController; this class only turns GTK signals
into controller events and redraws from LauncherState.
"""

import gi

gi.require_version("Gtk", "4.0")
from gi.repository import Gdk, GLib, Gtk, Pango
from loguru import logger

from quickgrid.controller import LauncherController
from quickgrid.view.navigator import Direction
from quickgrid.view.state import Activate, LauncherState, Move, QueryChanged

_ARROWS = {
    Gdk.KEY_Up: Direction.UP,
    Gdk.KEY_Down: Direction.DOWN,
    Gdk.KEY_Left: Direction.LEFT,
    Gdk.KEY_Right: Direction.RIGHT,
}

_ACTIVATE_KEYS = (Gdk.KEY_Return, Gdk.KEY_KP_Enter)


class GridPanel:
    """
    Launcher window bound to a LauncherController.

    Args:
        controller: Owner of the launcher state
        settings: Merged settings dictionary
        on_show: Called every time the panel becomes visible
    """

    def __init__(self, controller: LauncherController, settings: dict, on_show=None):
        self.controller = controller
        self.settings = settings
        self.on_show = on_show
        self.columns = controller.navigator.columns

        # Widgets (created in create_window)
        self.window = None
        self.search_entry = None
        self.results_box = None
        self.item_buttons = []  # Indexed like LauncherState.items

        self._syncing_entry = False
        self._shown_sections = None
        controller.connect(self._render)

    def create_window(self, application: Gtk.Application) -> Gtk.ApplicationWindow:
        """
        Create the (initially hidden) launcher window.

        Returns:
            Gtk.ApplicationWindow holding the entry and the grid
        """
        panel = self.settings["panel"]

        self.search_entry = Gtk.Entry(placeholder_text="Search applications...")
        self.search_entry.add_css_class("search-entry")
        self.search_entry.connect("changed", self._on_search_changed)

        self.results_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        self.results_box.add_css_class("search-results")

        scroll = Gtk.ScrolledWindow(vexpand=True, hexpand=True)
        scroll.set_child(self.results_box)

        content = Gtk.Box(orientation=Gtk.Orientation.VERTICAL)
        content.append(self.search_entry)
        content.append(scroll)

        window = Gtk.ApplicationWindow(
            application=application,
            title="QuickGrid",
            default_width=panel["width"],
            default_height=panel["height"],
            decorated=False,
            resizable=False,
            hide_on_close=True,
        )
        window.add_css_class("quickgrid")
        window.set_child(content)

        # Capture phase so arrows reach us before the entry moves its caret
        key_controller = Gtk.EventControllerKey()
        key_controller.set_propagation_phase(Gtk.PropagationPhase.CAPTURE)
        key_controller.connect("key-pressed", self._on_key_press)
        window.add_controller(key_controller)

        window.connect("notify::visible", self._on_visibility_changed)

        self.window = window
        self._render(self.controller.state)
        return window

    def toggle_visible(self) -> None:
        if self.window is None:
            return
        if self.window.get_visible():
            self.hide()
        else:
            self.window.present()

    def hide(self) -> None:
        if self.window is not None:
            self.window.set_visible(False)

    def _on_search_changed(self, entry):
        """Handle search entry text changes."""
        if self._syncing_entry:
            return
        self.controller.dispatch(QueryChanged(entry.get_text()))

    def _render(self, state: LauncherState):
        """Rebuild the grid from state."""
        if self.results_box is None:
            return

        if self.search_entry.get_text() != state.query:
            self._syncing_entry = True
            self.search_entry.set_text(state.query)
            self._syncing_entry = False

        # Focus moves only need the highlight updated
        if state.sections is self._shown_sections:
            self._update_selection_highlight(state)
            return
        self._shown_sections = state.sections

        # Clear existing (GTK4 way)
        child = self.results_box.get_first_child()
        while child:
            next_child = child.get_next_sibling()
            self.results_box.remove(child)
            child = next_child

        self.item_buttons = []

        if not state.items:
            empty_label = Gtk.Label(
                label="No matching applications" if state.query.strip() else "No applications found",
                justify=Gtk.Justification.CENTER,
            )
            empty_label.add_css_class("empty-state")
            self.results_box.append(empty_label)
            return

        for section in state.sections:
            if not section.items:
                continue

            header = Gtk.Label(label=section.label, halign=Gtk.Align.START)
            header.add_css_class("section-header")
            self.results_box.append(header)

            grid = Gtk.Grid(column_spacing=8, row_spacing=8, column_homogeneous=True)
            grid.add_css_class("app-grid")
            for offset, item in enumerate(section.items):
                button = self._create_item_button(item, len(self.item_buttons))
                grid.attach(button, offset % self.columns, offset // self.columns, 1, 1)
                self.item_buttons.append(button)
            self.results_box.append(grid)

        self._update_selection_highlight(state)

    def _create_item_button(self, item, index: int) -> Gtk.Button:
        """
        Create a grid cell for an app.

        Args:
            item: Item to show
            index: Position in the flattened sequence

        Returns:
            Gtk.Button with icon above name
        """
        icon = Gtk.Image.new_from_icon_name("application-x-executable")
        icon.set_pixel_size(48)

        label = Gtk.Label(
            label=item.display_name,
            max_width_chars=12,
            ellipsize=Pango.EllipsizeMode.END,
        )
        label.add_css_class("app-name")

        box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=4)
        box.append(icon)
        box.append(label)

        button = Gtk.Button(child=box, focusable=False, tooltip_text=item.display_name)
        button.add_css_class("app-item")
        button.connect("clicked", lambda _btn, i=index: self._activate(i))
        return button

    def _update_selection_highlight(self, state: LauncherState):
        """Update visual highlight for keyboard navigation."""
        for i, button in enumerate(self.item_buttons):
            if i == state.focus.selected:
                button.add_css_class("keyboard-selected")
            else:
                button.remove_css_class("keyboard-selected")

    def _activate(self, index=None):
        """Launch an item and close the panel after a short delay."""
        if self.controller.dispatch(Activate(index)):
            close_delay = self.settings["launcher"]["close_delay_ms"]
            GLib.timeout_add(close_delay, self._close_callback)

    def _close_callback(self) -> bool:
        self.hide()
        return False  # Don't repeat

    def _on_key_press(self, controller, keyval, keycode, state):
        """Handle keyboard events - arrows for navigation, Enter to launch, Escape to close."""
        if keyval == Gdk.KEY_Escape:
            self.hide()
            return True

        direction = _ARROWS.get(keyval)
        if direction is not None:
            return self.controller.dispatch(Move(direction))

        if keyval in _ACTIVATE_KEYS:
            self._activate()
            return True

        return False

    def _on_visibility_changed(self, window, param):
        """Clear search on close, refocus and rescan on open."""
        if window.get_visible():
            self.search_entry.grab_focus()
            if self.on_show is not None:
                self.on_show()
        else:
            # Fresh start next time
            self.controller.clear_query()
            logger.debug("Launcher hidden")
