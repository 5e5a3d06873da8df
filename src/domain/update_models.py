"""Update models for database operations."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.task import UtcDatetime


class TaskUpdate(BaseModel):
    """Update payload replacing a task's title, description and due date."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    due_date: UtcDatetime


class TaskCompletionUpdate(BaseModel):
    """Update payload for task completion."""

    completed: bool
