from __future__ import annotations
from typing import List, Protocol

from task_tracker.domain.task_models import Task


class TaskStore(Protocol):
    """
    Whole-collection storage: every call reads or writes everything.
    Swap implementations without touching the service or routes.
    """

    async def load_all(self) -> List[Task]: ...

    async def save_all(self, tasks: List[Task]) -> None: ...
