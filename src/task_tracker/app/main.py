from pathlib import Path
import os
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_tracker.app.routes import tasks, pages
from task_tracker.app.middleware.access_log import AccessLogMiddleware
from task_tracker.domain.errors import TaskError
from task_tracker.infra.store.task_store_json import JsonFileTaskStore
from task_tracker.observability.logging import setup_logging
from task_tracker.services.task_service import TaskService

BASE_DIR = Path(__file__).resolve().parent
logger = logging.getLogger("tasks.system")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(tasks_path: Optional[str] = None) -> FastAPI:
    setup_logging()
    tasks_path = tasks_path or os.getenv("TASKS_DB_PATH", "./tasks-db.json")
    logger.info(
        "system.start",
        extra={"category": "system", "event": "system.start", "tasks_path": tasks_path},
    )

    app = FastAPI(title="Task Tracker")
    app.add_middleware(AccessLogMiddleware)

    # Static files (CSS/JS)
    app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

    app.state.task_service = TaskService(JsonFileTaskStore(tasks_path))

    # Routers
    app.include_router(tasks.router)
    app.include_router(pages.router)

    @app.exception_handler(TaskError)
    async def _task_error(request: Request, exc: TaskError):
        if exc.status_code >= 500:
            logger.error(
                "task.error",
                extra={"category": "system", "event": "task.error", "error": exc.message},
            )
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body" and not isinstance(p, int))
        message = first.get("msg", "Invalid request")
        return _error(400, f"{field}: {message}" if field else message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "task_tracker.app.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
