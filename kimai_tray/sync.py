import logging

from kimai_tray.client import KimaiError, NoActiveTask
from kimai_tray.models import MAX_RECENT, MenuState

log = logging.getLogger(__name__)


# ========== State Synchronizer ==========
class StateSynchronizer:
    """Fetches recent and active timesheets and folds them into a MenuState.

    Both fetches run on every pass and fail independently. A failed
    fetch-recent keeps the list from the last successful pass; a failed
    fetch-active shows nothing as running. synchronize() never raises.
    """

    def __init__(self, client, recent_limit=MAX_RECENT):
        self.client = client
        self.recent_limit = min(recent_limit, MAX_RECENT)
        self._last_recent = ()

    def synchronize(self):
        recent = self._fetch_recent()
        active = self._fetch_active()
        return MenuState(recent_tasks=recent, active_task=active)

    def _fetch_recent(self):
        try:
            tasks = self.client.fetch_recent(self.recent_limit)
        except KimaiError as e:
            log.warning(
                f"Letzte Timesheets laden fehlgeschlagen ({type(e).__name__}: {e}), "
                f"zeige {len(self._last_recent)} bekannte Einträge."
            )
            return self._last_recent
        self._last_recent = tuple(tasks[:self.recent_limit])
        return self._last_recent

    def _fetch_active(self):
        try:
            task = self.client.fetch_active()
        except NoActiveTask:
            log.info("Kein aktives Timesheet.")
            return None
        except KimaiError as e:
            log.error(f"Aktives Timesheet laden fehlgeschlagen ({type(e).__name__}: {e})")
            return None
        log.info(f"Aktives Timesheet: ID={task.id} {task.label}")
        return task
