from dataclasses import dataclass
from typing import Optional, Tuple

MAX_RECENT = 10


@dataclass(frozen=True)
class Task:
    id: int
    project_name: str
    activity_name: str
    begin: Optional[str] = None

    @property
    def label(self):
        return f"[{self.project_name}] {self.activity_name}"

    @classmethod
    def from_json(cls, data):
        """Build a Task from one timesheet object of the Kimai API.

        Raises KeyError, TypeError or ValueError on an unexpected shape;
        the client turns those into DecodeError.
        """
        task_id = data["id"]
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise ValueError(f"timesheet id is not an integer: {task_id!r}")
        return cls(
            id=task_id,
            project_name=str(data["project"]["name"]),
            activity_name=str(data["activity"]["name"]),
            begin=data.get("begin"),
        )


@dataclass(frozen=True)
class MenuState:
    recent_tasks: Tuple[Task, ...] = ()
    active_task: Optional[Task] = None

    def __post_init__(self):
        recent = tuple(self.recent_tasks)
        if len(recent) > MAX_RECENT:
            raise ValueError(f"at most {MAX_RECENT} recent tasks, got {len(recent)}")
        object.__setattr__(self, "recent_tasks", recent)


# --- Actions ---
@dataclass(frozen=True)
class Restart:
    task_id: int


@dataclass(frozen=True)
class Stop:
    task_id: int
