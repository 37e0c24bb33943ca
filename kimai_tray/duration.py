import logging
import re
from datetime import datetime

log = logging.getLogger(__name__)

INVALID_DURATION = "–"

# Kimai sends "+0000" where fromisoformat() wants "+00:00".
_OFFSET_RE = re.compile(r"([+-])(\d{2})(\d{2})$")


def parse_timestamp(value):
    """Parse a Kimai timestamp such as 2024-01-01T10:00:00+0000."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _OFFSET_RE.sub(r"\1\2:\3", text)
    return datetime.fromisoformat(text)


def format_duration(begin, now=None):
    """Elapsed time since `begin` as "<hours>:<minutes> h".

    Returns INVALID_DURATION instead of raising, so one bad timestamp
    cannot break rendering of the menu.
    """
    try:
        start = parse_timestamp(begin)
        if now is None:
            now = datetime.now(start.tzinfo)
        elapsed = int((now - start).total_seconds())
    except (AttributeError, TypeError, ValueError) as e:
        log.warning(f"Startzeit nicht lesbar: {begin!r} ({e})")
        return INVALID_DURATION

    elapsed = max(elapsed, 0)
    hours, rest = divmod(elapsed, 3600)
    return f"{hours}:{rest // 60} h"
