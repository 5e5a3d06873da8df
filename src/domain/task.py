"""Task domain models and enums."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC and normalise aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    try:
        return value.astimezone(UTC)
    except OverflowError as e:
        msg = f"{value.isoformat()} is outside the representable date range once converted to UTC"
        raise ValueError(msg) from e


UtcDatetime = Annotated[datetime, AfterValidator(_ensure_utc)]


class TaskSortKey(StrEnum):
    """Fields a task listing can be ordered by (always ascending)."""

    DUE_DATE = "dueDate"
    DATE_CREATED = "dateCreated"

    @property
    def column(self) -> str:
        """Store column backing this sort key."""
        return {TaskSortKey.DUE_DATE: "due_date", TaskSortKey.DATE_CREATED: "date_created"}[self]

    @classmethod
    def parse(cls, value: str | None) -> "TaskSortKey | None":
        """Return the matching sort key, or None for absent or unrecognised values."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class Task(BaseModel):
    """Task data transfer object.

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique task ID assigned by the store")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Detailed task description")
    due_date: UtcDatetime = Field(..., description="When the task is due")
    date_created: UtcDatetime = Field(..., description="Creation timestamp, set once by the service")
    completed: bool = Field(default=False, description="Whether the task has been completed")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Task":
        """Build a Task from a raw store record."""
        return cls.model_validate(record)

    def to_json(self) -> dict[str, Any]:
        """Serialize with camelCase keys and ISO-8601 timestamps."""
        return self.model_dump(mode="json", by_alias=True)
