import logging
import threading

from kimai_tray.dispatcher import ActionDispatcher
from kimai_tray.menu import MenuRebuilder
from kimai_tray.models import MenuState
from kimai_tray.sync import StateSynchronizer

log = logging.getLogger(__name__)


def _start_daemon(target, *args):
    threading.Thread(target=target, args=args, daemon=True).start()


def _call_now(func, *args):
    func(*args)


# ========== Tray Controller ==========
class TrayController:
    """Wires synchronizer, rebuilder and dispatcher around one MenuState.

    Remote calls run on worker threads started through `spawn`. Menu
    updates are handed to `run_on_ui` (GLib.idle_add in the tray). Each
    synchronize pass and the scheduling of its rebuild happen under one
    lock, so rebuilds reach the UI in the order the states were fetched.
    """

    def __init__(self, client, surface, run_on_ui=None, spawn=None, clock=None):
        self.state = MenuState()
        self.synchronizer = StateSynchronizer(client)
        self.dispatcher = ActionDispatcher(client, self.refresh_now)
        self.rebuilder = MenuRebuilder(surface, self.dispatch_in_background, clock=clock)
        self._run_on_ui = run_on_ui or _call_now
        self._spawn = spawn or _start_daemon
        self._lock = threading.Lock()

    def refresh_now(self):
        """Blocking synchronize + rebuild. Call from a worker thread."""
        with self._lock:
            state = self.synchronizer.synchronize()
            self.state = state
            self._run_on_ui(self._apply, state)
        return state

    def _apply(self, state):
        self.rebuilder.rebuild(state)
        # GLib.idle_add repeats callbacks that return True.
        return False

    def refresh(self, *_args):
        self._spawn(self._guarded, "Aktualisierung", self.refresh_now)

    def dispatch_in_background(self, action):
        self._spawn(self._guarded, f"Aktion {action}", self.dispatcher.dispatch, action)

    def on_timer(self):
        self.refresh()
        return True

    def _guarded(self, what, func, *args):
        try:
            func(*args)
        except Exception as e:
            log.exception(f"Fehler bei {what}: {e}")
