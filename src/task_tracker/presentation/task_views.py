"""Pure view logic for the task page: partitioning, ordering and badge styles.

Nothing here touches the store or the network, so the page routes and the
tests share exactly the same ordering rules.
"""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional

from task_tracker.domain.task_models import Task, TaskPriority


class SortMode(str, Enum):
    priority = "priority"
    date = "date"


PRIORITY_WEIGHT = {
    TaskPriority.high: 3,
    TaskPriority.medium: 2,
    TaskPriority.low: 1,
}

_BADGE_CLASS = {
    TaskPriority.high: "bg-danger",
    TaskPriority.medium: "bg-warning text-dark",
    TaskPriority.low: "bg-success",
}


class TaskPartition(NamedTuple):
    incomplete: List[Task]
    completed: List[Task]


def partition(tasks: Iterable[Task]) -> TaskPartition:
    incomplete: List[Task] = []
    completed: List[Task] = []
    for task in tasks:
        (completed if task.is_completed else incomplete).append(task)
    return TaskPartition(incomplete, completed)


def sort_tasks(tasks: Iterable[Task], mode: SortMode) -> List[Task]:
    """
    Order tasks for display without modifying the input.

    ``priority``: heaviest first (high, medium, low).
    ``date``: earliest due date first; tasks without one go last.
    Both sorts are stable, so ties keep their incoming order.
    """
    if SortMode(mode) is SortMode.priority:
        return sorted(tasks, key=lambda t: PRIORITY_WEIGHT[t.priority], reverse=True)
    return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or date.min))


def badge_class(priority: TaskPriority, completed: bool = False) -> str:
    if completed:
        return "bg-secondary"
    return _BADGE_CLASS[TaskPriority(priority)]


def format_due_date(due: Optional[date]) -> str:
    return due.strftime("%d/%m/%Y") if due else ""
