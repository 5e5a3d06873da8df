"""Tests for task domain models."""

from datetime import UTC, datetime

import pytest

from src.domain.task import Task, TaskSortKey


@pytest.mark.unit
class TestTaskSortKey:
    """Tests for TaskSortKey.parse."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("dueDate", TaskSortKey.DUE_DATE),
            ("dateCreated", TaskSortKey.DATE_CREATED),
            (None, None),
            ("", None),
            ("title", None),
            ("duedate", None),
        ],
    )
    def test_parse(self, value, expected):
        assert TaskSortKey.parse(value) is expected

    def test_columns(self):
        assert TaskSortKey.DUE_DATE.column == "due_date"
        assert TaskSortKey.DATE_CREATED.column == "date_created"


@pytest.mark.unit
class TestTask:
    """Tests for Task record mapping and serialization."""

    def test_from_record(self):
        task = Task.from_record(
            {
                "id": "7",
                "title": "Water plants",
                "description": "All of them",
                "due_date": "2025-01-01T00:00:00.000000+00:00",
                "date_created": "2024-12-01T08:00:00.000000+00:00",
                "completed": 1,
            }
        )

        assert task.completed is True
        assert task.due_date == datetime(2025, 1, 1, tzinfo=UTC)

    def test_to_json_uses_camel_case(self):
        task = Task(
            id="1",
            title="t",
            description="d",
            due_date=datetime(2025, 1, 1),
            date_created=datetime(2024, 12, 1, tzinfo=UTC),
            completed=False,
        )

        assert task.to_json() == {
            "id": "1",
            "title": "t",
            "description": "d",
            "dueDate": "2025-01-01T00:00:00Z",
            "dateCreated": "2024-12-01T00:00:00Z",
            "completed": False,
        }
