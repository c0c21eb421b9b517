"""Task API endpoints."""

from fastapi import APIRouter, Depends, Path, status

from app.core.dependencies import get_task_store
from app.tasks.models import NewTask, Task
from app.tasks.service import TaskService
from app.tasks.store import TaskStore

router = APIRouter(prefix="/v1/tasks", tags=["Tasks"])


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(
    body: NewTask,
    store: TaskStore = Depends(get_task_store),
):
    """Validate and insert a new task."""
    return await TaskService.create(store, body)


@router.get("/{task_id}", response_model=Task)
async def get_task(
    task_id: str = Path(..., description="Task ID"),
    store: TaskStore = Depends(get_task_store),
):
    return await TaskService.get(store, task_id)
