"""FastAPI dependencies supplying the store handle and task service."""

from fastapi import Depends, Request

from src.core.db_client import Database
from src.services.task_service import TaskService


def get_database(request: Request) -> Database:
    """Return the store handle opened during application startup."""
    return request.app.state.db


def get_task_service(database: Database = Depends(get_database)) -> TaskService:
    """Build a task service bound to the request's store handle."""
    return TaskService(database)
