#!/usr/bin/env python3
"""
Kimai Tray
Shows the running Kimai timesheet and the ten most recent ones in the
status area. A click restarts a recent timesheet or stops the active one.
"""

import argparse
import logging
import signal
import sys

from kimai_tray.client import KimaiClient
from kimai_tray.config import CONFIG_DIR, LOG_FILE, ConfigError, load_config
from kimai_tray.controller import TrayController

log = logging.getLogger("kimai_tray")


# --- Logging ---
def setup_logging(debug=False):
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler()
        ]
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="kimai-tray", description="Kimai timesheets in the status area.")
    parser.add_argument("--config", help="path to config.json")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def build_client(config):
    return KimaiClient(
        config["url"],
        config["user"],
        config["token"],
        timeout=config["request_timeout_seconds"],
    )


# ========== Entry Point ==========
def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        log.error(str(e))
        sys.exit(1)

    # GTK is only needed from here on.
    from kimai_tray.tray import TraySurface, run_on_ui
    from gi.repository import GLib, Gtk

    client = build_client(config)
    controller = None

    def on_refresh(_item):
        controller.refresh()

    def on_quit(_item):
        log.info("Beende.")
        Gtk.main_quit()

    surface = TraySurface(config["icon"], on_refresh, on_quit)
    controller = TrayController(client, surface, run_on_ui=run_on_ui)
    controller.refresh()

    interval = config["refresh_interval_seconds"]
    if interval > 0:
        GLib.timeout_add(int(interval * 1000), controller.on_timer)
        log.info(f"Automatische Aktualisierung alle {interval:g} s.")

    signal.signal(signal.SIGINT, signal.SIG_DFL)
    log.info(f"Gestartet, Kimai: {config['url']}")
    Gtk.main()


if __name__ == "__main__":
    main()
