import logging

from kimai_tray.client import KimaiError
from kimai_tray.models import Restart, Stop

log = logging.getLogger(__name__)


# ========== Action Dispatcher ==========
class ActionDispatcher:
    """Sends Restart/Stop to Kimai and resynchronizes after a success.

    `resync` is called with no arguments and must run one
    synchronize+rebuild cycle. Failures are logged and leave the menu as
    it is.
    """

    def __init__(self, client, resync):
        self.client = client
        self.resync = resync

    def dispatch(self, action):
        if isinstance(action, Restart):
            call, verb = self.client.restart, "Neustart"
        elif isinstance(action, Stop):
            call, verb = self.client.stop, "Stopp"
        else:
            raise TypeError(f"Unbekannte Aktion: {action!r}")

        try:
            call(action.task_id)
        except KimaiError as e:
            log.error(f"{verb} von Timesheet {action.task_id} fehlgeschlagen: {e}")
            return False

        self.resync()
        return True
