"""Todo creation for reaction-driven tasks."""

import logging
import random
from datetime import datetime

from matrix_todo.models.todo import CreatedVia, NewTodo, Todo, Urgency
from matrix_todo.store.base import TODOS, RecordStore
from matrix_todo.tasks.urgency import initial_importance_score, urgency_to_deadline

logger = logging.getLogger(__name__)


def build_new_todo(
    user_id: str,
    title: str,
    body: str | None,
    urgency: Urgency,
    now: datetime,
    created_via: CreatedVia = CreatedVia.MANUAL,
    rng: random.Random | None = None,
) -> NewTodo:
    """Derive deadline and starting importance from ``urgency`` as of ``now``.

    Manual and Slack-created todos share this path so both get the same
    importance heuristic.
    """
    deadline = urgency_to_deadline(urgency, now)
    return NewTodo(
        user_id=user_id,
        title=title,
        body=body,
        deadline=deadline,
        importance_score=initial_importance_score(deadline, now.date(), rng),
        created_via=created_via,
    )


async def create_todo(store: RecordStore, new_todo: NewTodo) -> Todo:
    """Insert and return the todo in one round trip.

    A single insert-returning call means the row is never visible to the
    realtime feed without its id being known here.
    """
    row = await store.create_returning(TODOS, new_todo.model_dump(mode="json"))
    todo = Todo.model_validate(row)
    logger.info(
        "Created todo %s for user %s (via=%s, deadline=%s)",
        todo.id,
        todo.user_id,
        todo.created_via.value,
        todo.deadline,
    )
    return todo
