from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from starlette.templating import Jinja2Templates

from task_tracker.app.routes.tasks import get_service
from task_tracker.presentation.task_views import (
    SortMode,
    badge_class,
    format_due_date,
    partition,
    sort_tasks,
)
from task_tracker.services.task_service import TaskService

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.update(badge_class=badge_class, format_due_date=format_due_date)

router = APIRouter(tags=["pages"])


async def _lists_context(svc: TaskService, sort: SortMode) -> dict:
    parts = partition(await svc.list_tasks())
    return {
        "sort": sort.value,
        "incomplete": sort_tasks(parts.incomplete, sort),
        "completed": parts.completed,
    }


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, sort: SortMode = SortMode.priority, svc: TaskService = Depends(get_service)):
    context = await _lists_context(svc, sort)
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/partials/tasks", response_class=HTMLResponse)
async def task_lists(request: Request, sort: SortMode = SortMode.priority, svc: TaskService = Depends(get_service)):
    context = await _lists_context(svc, sort)
    return templates.TemplateResponse(request, "_task_lists.html", context)
