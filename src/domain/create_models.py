"""Pydantic models for creating records in database."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.domain.task import UtcDatetime


class TaskCreate(BaseModel):
    """Pydantic model for creating a task record."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(..., min_length=1, description="Detailed task description")
    due_date: UtcDatetime = Field(..., description="When the task is due")
