"""Error taxonomy for task operations and their HTTP mapping."""

from pydantic import BaseModel

from src.core.config import constants


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"
    ERR_STORE_UNAVAILABLE = "ERR_STORE_UNAVAILABLE"


class ErrorResponse(BaseModel):
    """Error body returned to API callers."""

    message: str


class TaskServiceError(Exception):
    """Base class for failures surfaced by the task service."""

    code: str = ErrorCode.ERR_STORE_UNAVAILABLE
    status_code: int = constants.HTTP_SERVER_ERROR


class TaskValidationError(TaskServiceError):
    """Required input was missing or malformed."""

    code = ErrorCode.ERR_VALIDATION

    def __init__(self, message: str, *, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class TaskNotFoundError(TaskServiceError):
    """No task exists with the requested identifier."""

    code = ErrorCode.ERR_TASK_NOT_FOUND
    status_code = constants.HTTP_NOT_FOUND

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StoreUnavailableError(TaskServiceError):
    """The store could not be reached or the query could not be executed."""

    code = ErrorCode.ERR_STORE_UNAVAILABLE


def error_response(
    exception: TaskServiceError,
    message: str,
    *,
    not_found_message: str = "Task not found",
) -> tuple[int, ErrorResponse]:
    """Map a task service error to its HTTP status and response body.

    Not-found errors map to 404 with not_found_message; every other failure
    collapses to a server error with message.

    Args:
        exception: The error raised by the service
        message: Human-readable message for non-404 failures
        not_found_message: Message for 404 responses

    Returns:
        Tuple of (status_code, ErrorResponse)
    """
    if isinstance(exception, TaskNotFoundError):
        return exception.status_code, ErrorResponse(message=not_found_message)
    return constants.HTTP_SERVER_ERROR, ErrorResponse(message=message)
