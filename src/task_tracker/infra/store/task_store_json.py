from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from task_tracker.domain.errors import StoreCorruptedError
from task_tracker.domain.task_models import Task

logger = logging.getLogger("tasks.store")

_task_list = TypeAdapter(List[Task])


class JsonFileTaskStore:
    """
    The whole collection as one indented JSON array in a single file.

    A missing file is an empty collection. A file that exists but does not
    decode is an error, never silently treated as empty.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    async def load_all(self) -> List[Task]:
        return await asyncio.to_thread(self._read)

    async def save_all(self, tasks: List[Task]) -> None:
        await asyncio.to_thread(self._write, list(tasks))

    def _read(self) -> List[Task]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            logger.info(
                "store.empty",
                extra={"category": "store", "event": "store.empty", "path": str(self.path)},
            )
            return []

        try:
            tasks = _task_list.validate_json(raw.decode("utf-8"))
        except (PydanticValidationError, UnicodeDecodeError) as exc:
            logger.error(
                "store.corrupt",
                extra={"category": "store", "event": "store.corrupt", "path": str(self.path)},
            )
            raise StoreCorruptedError(f"Task file is unreadable: {self.path}") from exc

        logger.debug(
            "store.load",
            extra={"category": "store", "event": "store.load", "count": len(tasks)},
        )
        return tasks

    def _write(self, tasks: List[Task]) -> None:
        payload = [t.model_dump(mode="json", by_alias=True, exclude_none=True) for t in tasks]
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # write-then-rename so readers only ever see the old or the new file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug(
            "store.save",
            extra={"category": "store", "event": "store.save", "count": len(tasks)},
        )
