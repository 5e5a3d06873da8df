"""Domain models and DTOs."""

from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskSortKey
from src.domain.update_models import TaskCompletionUpdate, TaskUpdate


__all__ = [
    "Task",
    "TaskCompletionUpdate",
    "TaskCreate",
    "TaskSortKey",
    "TaskUpdate",
]
