from __future__ import annotations
from typing import List

from task_tracker.domain.task_models import Task


class InMemoryTaskStore:
    """
    Process-local store with the same load-all/save-all contract as the file store.
    Models are copied in and out so callers never share instances with the store.
    """
    def __init__(self, tasks: List[Task] | None = None):
        self._tasks: List[Task] = [t.model_copy() for t in tasks or []]

    async def load_all(self) -> List[Task]:
        return [t.model_copy() for t in self._tasks]

    async def save_all(self, tasks: List[Task]) -> None:
        self._tasks = [t.model_copy() for t in tasks]
