"""Unit tests for the task error taxonomy."""

import pytest

from src.core.errors import (
    ErrorCode,
    StoreUnavailableError,
    TaskNotFoundError,
    TaskServiceError,
    TaskValidationError,
    error_response,
)


@pytest.mark.unit
class TestErrorResponse:
    """Tests for error_response."""

    def test_not_found_maps_to_404(self):
        status_code, body = error_response(TaskNotFoundError("42"), "Error deleting the task!")

        assert status_code == 404
        assert body.message == "Task not found"

    def test_not_found_message_override(self):
        status_code, body = error_response(
            TaskNotFoundError("42"), "Error deleting the task!", not_found_message="Task not found!"
        )

        assert status_code == 404
        assert body.message == "Task not found!"

    def test_validation_collapses_to_500(self):
        status_code, body = error_response(TaskValidationError("bad", fields=["title"]), "Error creating tasks!")

        assert status_code == 500
        assert body.message == "Error creating tasks!"

    def test_store_unavailable_maps_to_500(self):
        status_code, body = error_response(StoreUnavailableError("disk I/O error"), "Error grabbing tasks!")

        assert status_code == 500
        assert body.message == "Error grabbing tasks!"


@pytest.mark.unit
class TestErrorClasses:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (TaskValidationError("bad"), ErrorCode.ERR_VALIDATION),
            (TaskNotFoundError("1"), ErrorCode.ERR_TASK_NOT_FOUND),
            (StoreUnavailableError("down"), ErrorCode.ERR_STORE_UNAVAILABLE),
        ],
    )
    def test_codes(self, error: TaskServiceError, code: str):
        assert isinstance(error, TaskServiceError)
        assert error.code == code

    def test_not_found_keeps_task_id(self):
        error = TaskNotFoundError("abc")

        assert error.task_id == "abc"
        assert "abc" in str(error)

    def test_validation_fields_default_empty(self):
        assert TaskValidationError("bad").fields == []
