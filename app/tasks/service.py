"""Service layer for tasks."""

import logging

from app.core.exceptions import AppException, BadRequestException, NotFoundException
from app.tasks.models import MAX_TAGS, NewTask, Task
from app.tasks.store import TaskNotFoundError, TaskStore, TaskStoreError

logger = logging.getLogger(__name__)


class TaskService:
    """Validate-then-store operations over a TaskStore."""

    @staticmethod
    def validate(new_task: NewTask) -> NewTask:
        """Reject blank titles/tags and oversized tag lists; returns a cleaned copy."""
        title = new_task.title.strip()
        if not title:
            raise BadRequestException("error validating task: title must not be blank")

        tags = [tag.strip() for tag in new_task.tags]
        if any(not tag for tag in tags):
            raise BadRequestException("error validating task: tags must not be blank")
        if len(tags) > MAX_TAGS:
            raise BadRequestException(f"error validating task: at most {MAX_TAGS} tags allowed")

        return NewTask(title=title, tags=tags)

    @classmethod
    async def create(cls, store: TaskStore, new_task: NewTask) -> Task:
        new_task = cls.validate(new_task)
        try:
            task = await store.insert(new_task)
        except TaskStoreError as e:
            logger.error(f"Failed to insert task: {e}")
            raise AppException("error inserting task")
        logger.info(f"Created task {task.id}")
        return task

    @staticmethod
    async def get(store: TaskStore, task_id: str) -> Task:
        try:
            return await store.get(task_id)
        except TaskNotFoundError:
            raise NotFoundException("Task not found")
        except TaskStoreError as e:
            logger.error(f"Failed to get task {task_id}: {e}")
            raise AppException("error getting task")
