"""Task API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from src.core.config import constants
from src.core.errors import TaskServiceError, error_response
from src.core.logging import log_with_context
from src.domain.create_models import TaskCreate
from src.domain.task import Task, TaskSortKey
from src.domain.update_models import TaskCompletionUpdate, TaskUpdate
from src.interface.dependencies import get_task_service
from src.services.task_service import TaskService, parse_payload


router = APIRouter(prefix="/api/tasks", tags=["tasks"])
logger = logging.getLogger(__name__)

# Success messages
MSG_TASK_CREATED = "Task created successfully"
MSG_TASK_COMPLETE = "Task set to complete."
MSG_TASK_NOT_COMPLETE = "Task set to not complete."
MSG_TASK_DELETED = "Task deleted successfully!"
MSG_TASK_UPDATED = "Task updated successfully!"

# Not-found messages
ERROR_MSG_NOT_FOUND = "Task not found"
ERROR_MSG_NOT_FOUND_EMPHATIC = "Task not found!"

# Error messages
ERROR_MSG_LIST_FAILED = "Error grabbing tasks!"
ERROR_MSG_CREATE_FAILED = "Error creating tasks!"
ERROR_MSG_COMPLETE_FAILED = "Error completing the task!"
ERROR_MSG_NOT_COMPLETE_FAILED = "Error setting task to not complete!"
ERROR_MSG_DELETE_FAILED = "Error deleting the task!"
ERROR_MSG_UPDATE_FAILED = "Error updating the task!"


def _task_response(task: Task, message: str) -> JSONResponse:
    return JSONResponse(content={"task": task.to_json(), "message": message}, status_code=constants.HTTP_OK)


def _error_response(
    exception: TaskServiceError,
    message: str,
    *,
    operation: str,
    not_found_message: str = ERROR_MSG_NOT_FOUND,
) -> JSONResponse:
    """Log a service failure and render it as a {message} body."""
    status_code, body = error_response(exception, message, not_found_message=not_found_message)
    level = "warning" if status_code == constants.HTTP_NOT_FOUND else "error"
    log_with_context(
        logger,
        level,
        f"{operation}_failed",
        error_code=exception.code,
        status_code=status_code,
        error=str(exception),
    )
    return JSONResponse(content=body.model_dump(), status_code=status_code)


@router.get("")
async def list_tasks(
    sort_by: str | None = Query(default=None, alias="sortBy"),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Return every task, sorted ascending by dueDate or dateCreated when requested."""
    try:
        tasks = await service.list_tasks(sort_by=TaskSortKey.parse(sort_by))
    except TaskServiceError as e:
        return _error_response(e, ERROR_MSG_LIST_FAILED, operation="list_tasks")

    return JSONResponse(content=[task.to_json() for task in tasks], status_code=constants.HTTP_OK)


@router.post("/todo")
async def create_task(
    payload: dict[str, Any] | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Create a task from {title, description, dueDate}."""
    try:
        task = await service.create_task(parse_payload(TaskCreate, payload))
    except TaskServiceError as e:
        return _error_response(e, ERROR_MSG_CREATE_FAILED, operation="create_task")

    return _task_response(task, MSG_TASK_CREATED)


@router.patch("/complete/{task_id}")
async def complete_task(
    task_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Set a task's completed flag to the supplied value."""
    try:
        data = await service.parse_for_task(task_id, TaskCompletionUpdate, payload)
        task = await service.set_completion(task_id, data)
    except TaskServiceError as e:
        return _error_response(e, ERROR_MSG_COMPLETE_FAILED, operation="complete_task")

    return _task_response(task, MSG_TASK_COMPLETE)


@router.patch("/notComplete/{task_id}")
async def uncomplete_task(
    task_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Set a task's completed flag to the supplied value.

    Same operation as complete_task; only the response messages differ.
    """
    try:
        data = await service.parse_for_task(task_id, TaskCompletionUpdate, payload)
        task = await service.set_completion(task_id, data)
    except TaskServiceError as e:
        return _error_response(e, ERROR_MSG_NOT_COMPLETE_FAILED, operation="uncomplete_task")

    return _task_response(task, MSG_TASK_NOT_COMPLETE)


@router.delete("/delete/{task_id}")
async def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Delete a task, echoing its prior state as confirmation."""
    try:
        task = await service.delete_task(task_id)
    except TaskServiceError as e:
        return _error_response(
            e, ERROR_MSG_DELETE_FAILED, operation="delete_task", not_found_message=ERROR_MSG_NOT_FOUND_EMPHATIC
        )

    return _task_response(task, MSG_TASK_DELETED)


@router.put("/update/{task_id}")
async def update_task(
    task_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    service: TaskService = Depends(get_task_service),
) -> JSONResponse:
    """Replace a task's title, description and dueDate."""
    try:
        data = await service.parse_for_task(task_id, TaskUpdate, payload)
        task = await service.update_task(task_id, data)
    except TaskServiceError as e:
        return _error_response(
            e, ERROR_MSG_UPDATE_FAILED, operation="update_task", not_found_message=ERROR_MSG_NOT_FOUND_EMPHATIC
        )

    return _task_response(task, MSG_TASK_UPDATED)
