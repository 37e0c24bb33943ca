import json
import logging
import math
import os
from pathlib import Path

# --- Constants ---
APP_ID = "kimai-tray"
APP_NAME = "Kimai Tray"
CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "kimai-tray"
CONFIG_FILE = CONFIG_DIR / "config.json"
LOG_FILE = CONFIG_DIR / "kimai-tray.log"

REQUIRED_KEYS = ("url", "user", "token")

# --- Default Config ---
DEFAULT_CONFIG = {
    "url": "",
    "user": "",
    "token": "",
    "refresh_interval_seconds": 0,
    "request_timeout_seconds": 10,
    "icon": "appointment-soon",
}

log = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


def load_config(path=None):
    """Read the JSON config, merged over DEFAULT_CONFIG.

    Raises ConfigError when the file is missing, unreadable, not a JSON object,
    or lacks one of url/user/token.
    """
    path = Path(path) if path else CONFIG_FILE
    if not path.exists():
        raise ConfigError(f"Konfigurationsdatei nicht gefunden: {path}")
    try:
        with open(path, "r") as f:
            cfg = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Konfiguration {path} konnte nicht gelesen werden: {e}") from e

    if not isinstance(cfg, dict):
        raise ConfigError(f"Konfiguration {path} muss ein JSON-Objekt sein.")

    merged = {**DEFAULT_CONFIG, **cfg}
    missing = [k for k in REQUIRED_KEYS if not str(merged.get(k) or "").strip()]
    if missing:
        raise ConfigError(f"Fehlende Konfigurationswerte: {', '.join(missing)}")

    for key in ("refresh_interval_seconds", "request_timeout_seconds"):
        try:
            merged[key] = float(merged[key])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Ungültiger Wert für {key}: {merged[key]!r}") from e
        if not math.isfinite(merged[key]) or merged[key] < 0:
            raise ConfigError(f"Ungültiger Wert für {key}: {merged[key]!r}")

    # 0 disables the timer; shorter intervals would spin the main loop
    if 0 < merged["refresh_interval_seconds"] < 1:
        raise ConfigError(
            f"refresh_interval_seconds muss 0 oder mindestens 1 sein: {merged['refresh_interval_seconds']!r}"
        )
    if merged["request_timeout_seconds"] <= 0:
        raise ConfigError(f"request_timeout_seconds muss positiv sein: {merged['request_timeout_seconds']!r}")

    log.info(f"Konfiguration geladen: {path}")
    return merged
