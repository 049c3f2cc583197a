import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from task_tracker.domain.errors import BadRequestError, NotFoundError, ValidationError
from task_tracker.domain.task_models import Task, TaskCreate, TaskPatch, new_task_id
from task_tracker.infra.store.base import TaskStore

logger = logging.getLogger("tasks.service")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskService:
    """
    CRUD over a whole-collection store: load everything, change it in memory,
    save everything. Mutations hold one lock so two requests served by this
    process cannot interleave their read-modify-write cycles.
    """

    def __init__(self, store: TaskStore, clock: Callable[[], datetime] = _utcnow):
        self.store = store
        self.clock = clock
        self._lock = asyncio.Lock()

    async def list_tasks(self) -> List[Task]:
        return await self.store.load_all()

    async def get_task(self, task_id: str) -> Optional[Task]:
        for task in await self.store.load_all():
            if task.id == task_id:
                return task
        return None

    async def create_task(self, data: TaskCreate) -> Task:
        title = (data.title or "").strip()
        if not title:
            raise ValidationError("Title is required")

        task = Task(
            id=new_task_id(),
            title=title,
            description=data.description or "",
            priority=data.priority,
            due_date=data.due_date,
            is_completed=False,
            created_at=self.clock(),
        )
        async with self._lock:
            tasks = await self.store.load_all()
            tasks.append(task)
            await self.store.save_all(tasks)

        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "task_id": task.id, "title": task.title},
        )
        return task

    async def update_task(self, task_id: Optional[str], patch: TaskPatch) -> Task:
        if not task_id:
            raise BadRequestError("Task id is required")

        changes = patch.changes()
        if "title" in changes and isinstance(changes["title"], str):
            changes["title"] = changes["title"].strip()

        async with self._lock:
            tasks = await self.store.load_all()
            index = self._index_of(tasks, task_id)
            try:
                updated = Task.model_validate({**tasks[index].model_dump(), **changes})
            except PydanticValidationError as exc:
                fields = ", ".join(str(e["loc"][0]) for e in exc.errors() if e["loc"])
                raise ValidationError(f"Invalid value for: {fields}") from exc
            tasks[index] = updated
            await self.store.save_all(tasks)

        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": task_id, "fields": sorted(changes)},
        )
        return updated

    async def delete_task(self, task_id: Optional[str]) -> None:
        if not task_id:
            raise BadRequestError("Task id is required")

        async with self._lock:
            tasks = await self.store.load_all()
            index = self._index_of(tasks, task_id)
            del tasks[index]
            await self.store.save_all(tasks)

        logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id})

    @staticmethod
    def _index_of(tasks: List[Task], task_id: str) -> int:
        for i, task in enumerate(tasks):
            if task.id == task_id:
                return i
        logger.info("task.not_found", extra={"category": "tasks", "event": "task.not_found", "task_id": task_id})
        raise NotFoundError("Task not found")
