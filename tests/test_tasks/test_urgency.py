"""Tests for emoji-to-urgency mapping and the deadline/importance heuristics."""

import random
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from matrix_todo.models.todo import Urgency
from matrix_todo.models.user import DEFAULT_EMOJI_SETTINGS, EmojiSettings
from matrix_todo.tasks.urgency import (
    deadline_to_urgency,
    initial_importance_score,
    resolve_urgency,
    urgency_to_deadline,
)

CUSTOM = EmojiSettings(today_emoji="zap", tomorrow_emoji="bell", later_emoji="bookmark")
TODAY = date(2025, 3, 14)


@pytest.mark.parametrize(
    ("reaction", "expected"),
    [
        ("fire", Urgency.TODAY),
        ("calendar", Urgency.TOMORROW),
        ("memo", Urgency.LATER),
        ("eyes", None),
        ("", None),
    ],
)
def test_default_mapping(reaction: str, expected: Urgency | None):
    """Users without stored settings get the default fire/calendar/memo mapping."""
    assert resolve_urgency(reaction, None) == expected


@pytest.mark.parametrize(
    ("reaction", "expected"),
    [
        ("zap", Urgency.TODAY),
        ("bell", Urgency.TOMORROW),
        ("bookmark", Urgency.LATER),
        ("fire", None),
    ],
)
def test_custom_mapping_replaces_defaults(reaction: str, expected: Urgency | None):
    assert resolve_urgency(reaction, CUSTOM) == expected


def test_explicit_defaults_argument():
    assert resolve_urgency("zap", None, defaults=CUSTOM) == Urgency.TODAY
    assert DEFAULT_EMOJI_SETTINGS.today_emoji == "fire"


def test_urgency_to_deadline():
    now = datetime(2025, 3, 14, 23, 59, tzinfo=timezone.utc)
    assert urgency_to_deadline(Urgency.TODAY, now) == date(2025, 3, 14)
    assert urgency_to_deadline(Urgency.TOMORROW, now) == date(2025, 3, 15)
    assert urgency_to_deadline(Urgency.LATER, now) is None


def test_tomorrow_crosses_month_boundary():
    now = datetime(2025, 2, 28, 12, 0, tzinfo=timezone.utc)
    assert urgency_to_deadline(Urgency.TOMORROW, now) == date(2025, 3, 1)


@pytest.mark.parametrize(
    ("deadline", "expected"),
    [
        (None, Urgency.LATER),
        (date(2025, 3, 14), Urgency.TODAY),
        (date(2025, 3, 15), Urgency.TOMORROW),
        (date(2025, 3, 20), Urgency.LATER),
        (date(2025, 3, 1), Urgency.LATER),
    ],
)
def test_deadline_to_urgency(deadline: date | None, expected: Urgency):
    assert deadline_to_urgency(deadline, TODAY) == expected


def test_overdue_and_due_today_scores():
    assert initial_importance_score(date(2025, 3, 10), TODAY) == 0.7
    assert initial_importance_score(TODAY, TODAY) == 0.6


def test_random_score_range():
    rng = random.Random(42)
    scores = [initial_importance_score(None, TODAY, rng) for _ in range(500)]
    assert all(0.3 <= score < 0.7 for score in scores)
    assert 0.5 not in scores


def test_random_score_redraws_exact_midpoint():
    """A draw landing exactly on 0.5 is discarded."""
    rng = MagicMock()
    rng.random.side_effect = [0.5, 0.9]

    score = initial_importance_score(date(2025, 3, 20), TODAY, rng)

    assert score == pytest.approx(0.66)
    assert rng.random.call_count == 2
