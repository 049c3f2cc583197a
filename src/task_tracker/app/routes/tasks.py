from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from task_tracker.domain.task_models import Task, TaskCreate, TaskUpdate
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_service(request: Request) -> TaskService:
    # wired in create_app()
    return request.app.state.task_service


@router.get("", response_model=list[Task])
async def list_tasks(svc: TaskService = Depends(get_service)):
    return await svc.list_tasks()


@router.post("", response_model=Task, status_code=201)
async def create_task(payload: TaskCreate, svc: TaskService = Depends(get_service)):
    return await svc.create_task(payload)


@router.put("", response_model=Task)
async def update_task(payload: TaskUpdate, svc: TaskService = Depends(get_service)):
    return await svc.update_task(payload.id, payload.patch())


@router.delete("")
async def delete_task(id: Optional[str] = None, svc: TaskService = Depends(get_service)):
    await svc.delete_task(id)
    return {"success": True}


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, svc: TaskService = Depends(get_service)):
    task = await svc.get_task(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task
