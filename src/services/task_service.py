"""Task service for CRUD operations over the task collection."""

import logging
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.core.db_client import Database, DatabaseError, RecordNotFoundError
from src.core.errors import StoreUnavailableError, TaskNotFoundError, TaskValidationError
from src.core.logging import span
from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskSortKey
from src.domain.update_models import TaskCompletionUpdate, TaskUpdate


logger = logging.getLogger(__name__)

COLLECTION = "tasks"

PayloadModel = TypeVar("PayloadModel", bound=BaseModel)


def parse_payload(model: type[PayloadModel], payload: dict[str, Any] | None) -> PayloadModel:
    """Validate a request body against a DTO.

    Raises:
        TaskValidationError: If required fields are missing or malformed
    """
    try:
        return model.model_validate(payload or {})
    except ValidationError as e:
        fields = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        msg = f"Invalid {model.__name__} payload: {', '.join(fields)}"
        raise TaskValidationError(msg, fields=fields) from e


class TaskService:
    """Applies task operations against an injected store handle.

    Holds no state of its own; every call reads or writes the store directly.
    """

    def __init__(self, database: Database) -> None:
        self._db = database

    async def parse_for_task(
        self, task_id: str, model: type[PayloadModel], payload: dict[str, Any] | None
    ) -> PayloadModel:
        """Validate a request body for an operation on an existing task.

        A missing task is reported ahead of an invalid body.

        Raises:
            TaskNotFoundError: If the body is invalid and no task has this id
            TaskValidationError: If the body is invalid and the task exists
        """
        try:
            return parse_payload(model, payload)
        except TaskValidationError:
            await self._require_task(task_id)
            raise

    async def list_tasks(self, *, sort_by: TaskSortKey | None = None) -> list[Task]:
        """List all tasks, ascending by sort_by or in insertion order when it is None.

        Raises:
            StoreUnavailableError: If the query cannot be executed
        """
        with span("task_service.list_tasks"):
            try:
                records = await self._db.list_records(
                    collection=COLLECTION,
                    sort=sort_by.column if sort_by else "",
                )
            except DatabaseError as e:
                raise StoreUnavailableError(str(e)) from e

            logger.debug(f"Retrieved {len(records)} tasks", extra={"sort_by": sort_by})
            return [Task.from_record(record) for record in records]

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a task, stamping dateCreated and defaulting completed to False.

        Raises:
            StoreUnavailableError: If the record cannot be persisted
        """
        with span("task_service.create_task"):
            task_data = {
                "title": data.title,
                "description": data.description,
                "due_date": data.due_date,
                "date_created": datetime.now(UTC),
                "completed": False,
            }

            try:
                record = await self._db.create_record(collection=COLLECTION, data=task_data)
            except DatabaseError as e:
                raise StoreUnavailableError(str(e)) from e

            logger.info(f"Created task: {data.title}", extra={"task_id": record["id"]})
            return Task.from_record(record)

    async def set_completion(self, task_id: str, data: TaskCompletionUpdate) -> Task:
        """Set a task's completed flag and return the post-update task.

        Raises:
            TaskNotFoundError: If no task has this id
            StoreUnavailableError: If the update cannot be executed
        """
        with span("task_service.set_completion"):
            record = await self._update(task_id, {"completed": data.completed})
            logger.info("Set task completion", extra={"task_id": task_id, "completed": data.completed})
            return Task.from_record(record)

    async def update_task(self, task_id: str, data: TaskUpdate) -> Task:
        """Replace a task's title, description and due date.

        id, dateCreated and completed are never written here.

        Raises:
            TaskNotFoundError: If no task has this id
            StoreUnavailableError: If the update cannot be executed
        """
        with span("task_service.update_task"):
            record = await self._update(
                task_id,
                {"title": data.title, "description": data.description, "due_date": data.due_date},
            )
            logger.info("Updated task", extra={"task_id": task_id})
            return Task.from_record(record)

    async def delete_task(self, task_id: str) -> Task:
        """Delete a task and return its state prior to deletion.

        Raises:
            TaskNotFoundError: If no task has this id
            StoreUnavailableError: If the delete cannot be executed
        """
        with span("task_service.delete_task"):
            try:
                record = await self._db.delete_record(collection=COLLECTION, record_id=task_id)
            except RecordNotFoundError as e:
                raise TaskNotFoundError(task_id) from e
            except DatabaseError as e:
                raise StoreUnavailableError(str(e)) from e

            logger.info("Deleted task", extra={"task_id": task_id})
            return Task.from_record(record)

    async def _require_task(self, task_id: str) -> None:
        try:
            await self._db.get_record(collection=COLLECTION, record_id=task_id)
        except RecordNotFoundError as e:
            raise TaskNotFoundError(task_id) from e
        except DatabaseError as e:
            raise StoreUnavailableError(str(e)) from e

    async def _update(self, task_id: str, data: dict[str, Any]) -> dict[str, Any]:
        try:
            return await self._db.update_record(collection=COLLECTION, record_id=task_id, data=data)
        except RecordNotFoundError as e:
            raise TaskNotFoundError(task_id) from e
        except DatabaseError as e:
            raise StoreUnavailableError(str(e)) from e
