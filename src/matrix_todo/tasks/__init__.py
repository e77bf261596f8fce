"""Task rules: urgency buckets, deadlines, initial importance and creation."""

from matrix_todo.tasks.service import build_new_todo, create_todo
from matrix_todo.tasks.urgency import (
    deadline_to_urgency,
    initial_importance_score,
    resolve_urgency,
    urgency_to_deadline,
)

__all__ = [
    "build_new_todo",
    "create_todo",
    "deadline_to_urgency",
    "initial_importance_score",
    "resolve_urgency",
    "urgency_to_deadline",
]
