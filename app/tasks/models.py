"""Task Pydantic models and schemas."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


MAX_TAGS = 20


class NewTask(BaseModel):
    """Request to create a task."""
    title: str = Field(..., max_length=200)
    tags: List[str] = Field(default_factory=list)


class Task(BaseModel):
    """Task document returned to clients."""
    id: str
    title: str
    tags: List[str] = Field(default_factory=list)
    completed: bool = False
    created_at: datetime
