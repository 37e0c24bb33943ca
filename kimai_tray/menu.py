"""
Menu Rebuild Engine.

Renders a MenuState into a tray surface. The surface is anything with:

    set_label(slot, text)
    set_visible(slot, visible)
    set_group_enabled(group, enabled)
    subscribe(slot, callback) -> handle
    unsubscribe(handle)

Slots are the ten "recent:<n>" entries, "active" and "stop"; groups are
"recent" and "active". Every rebuild retires all bindings of the previous
one before installing its own, so a click can only ever act on the task
that is shown in that slot right now.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union

from kimai_tray.duration import format_duration
from kimai_tray.models import MAX_RECENT, Restart, Stop, Task

log = logging.getLogger(__name__)

RECENT_GROUP = "recent"
ACTIVE_GROUP = "active"
ACTIVE_SLOT = "active"
STOP_SLOT = "stop"
STOP_LABEL = "Stop"
INACTIVE_LABEL = "Nothing running"


def recent_slot(index):
    return f"recent:{index}"


RECENT_SLOTS = tuple(recent_slot(i) for i in range(MAX_RECENT))


@dataclass(frozen=True)
class RenderedEntry:
    slot: str
    label: str
    generation: int
    task: Optional[Task] = None
    action: Optional[Union[Restart, Stop]] = None


class EntryBinding:
    """Click listener for one entry of one rebuild.

    Holds the action built from the task captured at rebuild time. Once
    retired it ignores clicks, even if the toolkit still delivers one.
    """

    def __init__(self, entry, dispatch):
        self.entry = entry
        self._dispatch = dispatch
        self._live = True
        self._lock = threading.Lock()

    def retire(self):
        with self._lock:
            self._live = False

    def __call__(self, *_args):
        with self._lock:
            if not self._live:
                log.debug(f"Klick auf veralteten Eintrag ignoriert: {self.entry.label}")
                return False
        log.info(f"Klick: {self.entry.label} -> {self.entry.action}")
        self._dispatch(self.entry.action)
        return True


# ========== Menu Rebuild Engine ==========
class MenuRebuilder:
    def __init__(self, surface, dispatch, clock=None):
        self.surface = surface
        self.dispatch = dispatch
        self.clock = clock
        self.generation = 0
        self.entries = ()
        self._bindings = []
        self._lock = threading.RLock()

    def rebuild(self, state):
        with self._lock:
            self._retire_all()
            self.generation += 1
            entries = []
            entries.extend(self._render_recent(state.recent_tasks))
            entries.extend(self._render_active(state.active_task))
            self.entries = tuple(entries)
        log.debug(
            f"Menü neu aufgebaut (Generation {self.generation}): "
            f"{len(state.recent_tasks)} letzte, aktiv={state.active_task is not None}"
        )
        return self.entries

    def _retire_all(self):
        for binding, handle in self._bindings:
            binding.retire()
            self.surface.unsubscribe(handle)
        self._bindings = []

    def _bind(self, entry):
        binding = EntryBinding(entry, self.dispatch)
        handle = self.surface.subscribe(entry.slot, binding)
        self._bindings.append((binding, handle))
        return binding

    def _render_recent(self, tasks):
        entries = []
        for index, slot in enumerate(RECENT_SLOTS):
            if index >= len(tasks):
                self.surface.set_label(slot, "")
                self.surface.set_visible(slot, False)
                continue
            task = tasks[index]
            entry = RenderedEntry(
                slot=slot,
                label=task.label,
                generation=self.generation,
                task=task,
                action=Restart(task.id),
            )
            self.surface.set_label(slot, entry.label)
            self.surface.set_visible(slot, True)
            self._bind(entry)
            entries.append(entry)
        self.surface.set_group_enabled(RECENT_GROUP, bool(tasks))
        return entries

    def _render_active(self, task):
        if task is None:
            self.surface.set_label(ACTIVE_SLOT, INACTIVE_LABEL)
            self.surface.set_visible(STOP_SLOT, False)
            self.surface.set_group_enabled(ACTIVE_GROUP, False)
            return []

        now = self.clock() if self.clock else None
        label = f"{task.label} ({format_duration(task.begin, now)})"
        self.surface.set_label(ACTIVE_SLOT, label)
        info = RenderedEntry(slot=ACTIVE_SLOT, label=label, generation=self.generation, task=task)

        stop = RenderedEntry(
            slot=STOP_SLOT,
            label=STOP_LABEL,
            generation=self.generation,
            task=task,
            action=Stop(task.id),
        )
        self.surface.set_label(STOP_SLOT, STOP_LABEL)
        self.surface.set_visible(STOP_SLOT, True)
        self._bind(stop)
        self.surface.set_group_enabled(ACTIVE_GROUP, True)
        return [info, stop]
