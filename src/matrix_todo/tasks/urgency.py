"""Emoji-to-urgency mapping and the deadline/importance heuristics.

All calendar dates are UTC dates. Callers pass ``now`` explicitly so that
the day boundary is decided once per event.
"""

import random
from datetime import date, datetime, timedelta

from matrix_todo.models.todo import Urgency
from matrix_todo.models.user import DEFAULT_EMOJI_SETTINGS, EmojiSettings

OVERDUE_SCORE = 0.7
DUE_TODAY_SCORE = 0.6
_RANDOM_SCORE_MIN = 0.3
_RANDOM_SCORE_SPAN = 0.4


def resolve_urgency(
    reaction: str,
    settings: EmojiSettings | None,
    defaults: EmojiSettings = DEFAULT_EMOJI_SETTINGS,
) -> Urgency | None:
    """Map a reaction emoji to an urgency bucket.

    Users without configured settings get ``defaults``. Returns None when the
    emoji is not one of the three task emojis.
    """
    effective = settings or defaults
    if reaction == effective.today_emoji:
        return Urgency.TODAY
    if reaction == effective.tomorrow_emoji:
        return Urgency.TOMORROW
    if reaction == effective.later_emoji:
        return Urgency.LATER
    return None


def urgency_to_deadline(urgency: Urgency, now: datetime) -> date | None:
    """Convert an urgency bucket to a calendar-date deadline (None for later)."""
    if urgency is Urgency.TODAY:
        return now.date()
    if urgency is Urgency.TOMORROW:
        return (now + timedelta(days=1)).date()
    return None


def deadline_to_urgency(deadline: date | None, today: date) -> Urgency:
    """Urgency bucket a stored deadline falls into; inverse of urgency_to_deadline.

    Overdue deadlines and anything beyond tomorrow fall into ``later``.
    """
    if deadline is None:
        return Urgency.LATER
    if deadline == today:
        return Urgency.TODAY
    if deadline == today + timedelta(days=1):
        return Urgency.TOMORROW
    return Urgency.LATER


def initial_importance_score(
    deadline: date | None,
    today: date,
    rng: random.Random | None = None,
) -> float:
    """Starting importance for a new todo, before any pairwise comparison.

    Overdue and due-today tasks start high. Everything else draws from
    [0.3, 0.7) but never exactly 0.5, the important/not-important boundary,
    so the first comparison always moves the task into a quadrant.
    """
    if deadline is not None and deadline < today:
        return OVERDUE_SCORE
    if deadline == today:
        return DUE_TODAY_SCORE

    rng = rng or random.Random()
    score = 0.5
    while score == 0.5:
        score = _RANDOM_SCORE_MIN + rng.random() * _RANDOM_SCORE_SPAN
    return score
