from kimai_tray.client import NoActiveTask
from kimai_tray.models import Task


class FakeSurface:
    """In-memory stand-in for the GTK tray surface."""

    def __init__(self):
        self.labels = {}
        self.visible = {}
        self.groups = {}
        self.subscriptions = {}
        self.unsubscribed = []
        self._next_handle = 0

    def set_label(self, slot, text):
        self.labels[slot] = text

    def set_visible(self, slot, visible):
        self.visible[slot] = visible

    def set_group_enabled(self, group, enabled):
        self.groups[group] = enabled

    def subscribe(self, slot, callback):
        self._next_handle += 1
        self.subscriptions[self._next_handle] = (slot, callback)
        return self._next_handle

    def unsubscribe(self, handle):
        del self.subscriptions[handle]
        self.unsubscribed.append(handle)

    def callbacks(self, slot):
        return [cb for s, cb in self.subscriptions.values() if s == slot]

    def click(self, slot):
        return [cb() for cb in self.callbacks(slot)]


class FakeClient:
    """Scripted KimaiClient. Set `recent`/`active` to a value or an exception."""

    def __init__(self, recent=(), active=None):
        self.recent = recent if isinstance(recent, Exception) else list(recent)
        self.active = active
        self.fail_with = None
        self.calls = []

    def fetch_recent(self, limit=10):
        self.calls.append(("fetch_recent", limit))
        if isinstance(self.recent, Exception):
            raise self.recent
        return list(self.recent)[:limit]

    def fetch_active(self):
        self.calls.append(("fetch_active",))
        if isinstance(self.active, Exception):
            raise self.active
        if self.active is None:
            raise NoActiveTask()
        return self.active

    def restart(self, task_id):
        self.calls.append(("restart", task_id))
        if self.fail_with:
            raise self.fail_with

    def stop(self, task_id):
        self.calls.append(("stop", task_id))
        if self.fail_with:
            raise self.fail_with

    def count(self, name):
        return sum(1 for c in self.calls if c[0] == name)


def make_task(task_id, project="Kunde", activity="Entwicklung", begin=None):
    return Task(id=task_id, project_name=project, activity_name=activity, begin=begin)


def inline(func, *args):
    """Synchronous stand-in for the controller's thread spawner."""
    func(*args)
