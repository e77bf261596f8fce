"""Todo model and the enums it is built from."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class Urgency(str, Enum):
    """Urgency buckets driving the computed deadline."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    LATER = "later"


class TodoStatus(str, Enum):
    """Completion state of a todo."""

    OPEN = "open"
    DONE = "done"


class CreatedVia(str, Enum):
    """Where a todo came from."""

    MANUAL = "manual"
    SLACK_WEBHOOK = "slack_webhook"


class Todo(BaseModel):
    """A task row as stored in the ``todos`` collection."""

    id: str
    user_id: str
    title: str
    body: str | None = None
    status: TodoStatus = TodoStatus.OPEN
    deadline: date | None = None
    importance_score: float = Field(ge=0.0, le=1.0)
    created_via: CreatedVia = CreatedVia.MANUAL
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None


class NewTodo(BaseModel):
    """Fields supplied when creating a todo; the store assigns id and timestamps."""

    user_id: str
    title: str
    body: str | None = None
    status: TodoStatus = TodoStatus.OPEN
    deadline: date | None = None
    importance_score: float = Field(ge=0.0, le=1.0)
    created_via: CreatedVia = CreatedVia.MANUAL
