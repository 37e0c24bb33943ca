"""GTK 3 / AppIndicator implementation of the tray surface."""

import logging

import gi
gi.require_version("Gtk", "3.0")
try:
    gi.require_version("AyatanaAppIndicator3", "0.1")
    from gi.repository import AyatanaAppIndicator3 as AppIndicator3
except ValueError:
    gi.require_version("AppIndicator3", "0.1")
    from gi.repository import AppIndicator3

from gi.repository import GLib, Gtk

from kimai_tray.config import APP_ID, APP_NAME
from kimai_tray.menu import ACTIVE_GROUP, ACTIVE_SLOT, RECENT_GROUP, RECENT_SLOTS, STOP_LABEL, STOP_SLOT

log = logging.getLogger(__name__)


def run_on_ui(func, *args):
    GLib.idle_add(func, *args)


class TraySurface:
    """Pre-allocated menu: ten recent slots, the active task and Stop.

    Items are created once; rebuilds only change labels, visibility,
    sensitivity and signal handlers.
    """

    def __init__(self, icon, on_refresh, on_quit):
        self.indicator = AppIndicator3.Indicator.new(
            APP_ID,
            icon,
            AppIndicator3.IndicatorCategory.APPLICATION_STATUS,
        )
        self.indicator.set_status(AppIndicator3.IndicatorStatus.ACTIVE)
        self.indicator.set_title(APP_NAME)

        self._items = {}
        self._groups = {}
        self.menu = Gtk.Menu()

        # Recent
        recent_menu = self._add_group(RECENT_GROUP, "Recent")
        for slot in RECENT_SLOTS:
            item = Gtk.MenuItem(label="")
            item.set_no_show_all(True)
            recent_menu.append(item)
            self._items[slot] = item
        self.menu.append(Gtk.SeparatorMenuItem())

        # Active
        active_menu = self._add_group(ACTIVE_GROUP, "Active")
        active_entry = Gtk.MenuItem(label="")
        active_entry.set_sensitive(False)
        active_menu.append(active_entry)
        self._items[ACTIVE_SLOT] = active_entry
        stop_item = Gtk.MenuItem(label=STOP_LABEL)
        stop_item.set_no_show_all(True)
        active_menu.append(stop_item)
        self._items[STOP_SLOT] = stop_item
        self.menu.append(Gtk.SeparatorMenuItem())

        refresh_item = Gtk.MenuItem(label="Refresh")
        refresh_item.set_tooltip_text("Refresh the menu")
        refresh_item.connect("activate", on_refresh)
        self.menu.append(refresh_item)
        self.menu.append(Gtk.SeparatorMenuItem())

        quit_item = Gtk.MenuItem(label="Quit")
        quit_item.set_tooltip_text("Quit the whole app")
        quit_item.connect("activate", on_quit)
        self.menu.append(quit_item)

        self.menu.show_all()
        self.indicator.set_menu(self.menu)

    def _add_group(self, group, title):
        item = Gtk.MenuItem(label=title)
        submenu = Gtk.Menu()
        item.set_submenu(submenu)
        item.set_sensitive(False)
        self.menu.append(item)
        self._groups[group] = item
        return submenu

    # --- surface capability used by MenuRebuilder ---
    def set_label(self, slot, text):
        self._items[slot].set_label(text)

    def set_visible(self, slot, visible):
        self._items[slot].set_visible(visible)

    def set_group_enabled(self, group, enabled):
        self._groups[group].set_sensitive(enabled)

    def subscribe(self, slot, callback):
        item = self._items[slot]
        return item, item.connect("activate", callback)

    def unsubscribe(self, handle):
        item, handler_id = handle
        item.disconnect(handler_id)
