from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from enum import Enum
from datetime import date, datetime
from typing import Optional
import uuid


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class _CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire and on disk
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    """Create payload. Title presence is checked by the service, not here."""
    title: Optional[str] = None
    description: str = ""
    priority: TaskPriority = TaskPriority.low
    due_date: Optional[date] = None

    @field_validator("description", "priority", "due_date", mode="before")
    @classmethod
    def _blank_to_default(cls, value, info):
        # the page form posts "" for untouched inputs
        if value is None or value == "":
            return _CREATE_DEFAULTS[info.field_name]
        return value


class TaskPatch(_CamelModel):
    """
    Partial update. Only fields the caller actually sent are applied.
    There is no id / created_at field, so those can never be overwritten.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    is_completed: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskUpdate(TaskPatch):
    id: Optional[str] = None

    def patch(self) -> TaskPatch:
        return TaskPatch.model_validate(self.model_dump(exclude_unset=True, exclude={"id"}))


class Task(_CamelModel):
    id: str
    title: str = Field(min_length=1)
    description: str = ""
    priority: TaskPriority = TaskPriority.low
    due_date: Optional[date] = None
    is_completed: bool = False
    created_at: datetime


_CREATE_DEFAULTS = {"description": "", "priority": TaskPriority.low, "due_date": None}


def new_task_id() -> str:
    return str(uuid.uuid4())
