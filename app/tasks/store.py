"""MongoDB-backed task storage."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Protocol

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from app.tasks.models import NewTask, Task


class TaskNotFoundError(Exception):
    """No task exists with the requested id."""


class TaskStoreError(Exception):
    """The backing store failed."""


class TaskStore(Protocol):
    async def insert(self, new_task: NewTask) -> Task: ...

    async def get(self, task_id: str) -> Task: ...


def _to_task(doc: dict) -> Task:
    return Task(
        id=str(doc["_id"]),
        title=doc["title"],
        tags=doc.get("tags") or [],
        completed=bool(doc.get("completed", False)),
        created_at=doc["created_at"],
    )


class MongoTaskStore:
    """Tasks in a single Mongo collection, keyed by ObjectId."""

    def __init__(self, collection):
        self.collection = collection

    async def insert(self, new_task: NewTask) -> Task:
        doc = {
            "_id": ObjectId(),
            "title": new_task.title,
            "tags": list(new_task.tags),
            "completed": False,
            "created_at": datetime.now(timezone.utc),
        }
        try:
            await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise TaskStoreError(str(e)) from e
        return _to_task(doc)

    async def get(self, task_id: str) -> Task:
        try:
            oid = ObjectId(task_id)
        except (InvalidId, TypeError):
            raise TaskNotFoundError(task_id) from None

        try:
            doc = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise TaskStoreError(str(e)) from e
        if not doc:
            raise TaskNotFoundError(task_id)
        return _to_task(doc)
