"""Reaction event deduplication against the ``slack_event_processed`` ledger.

Slack delivers events at least once. A reaction is identified by
(channel, message ts, reaction, reacting user); the key is a plain join of
those fields so it can be grepped in logs. The ledger's unique constraint on
``event_key`` decides races between concurrent deliveries.
"""

import logging
import time
from collections.abc import Callable

from pydantic import BaseModel

from matrix_todo.models.slack import ProcessedEvent
from matrix_todo.store.base import PROCESSED_EVENTS, RecordStore

logger = logging.getLogger(__name__)


class DedupResult(BaseModel):
    """Whether an event key was seen for the first time."""

    was_new: bool
    existing_todo_id: str | None = None


def build_event_key(channel_id: str, message_ts: str, reaction: str, slack_user_id: str) -> str:
    """Deterministic idempotency key for one reaction by one user on one message."""
    return f"{channel_id}:{message_ts}:{reaction}:{slack_user_id}"


async def check_processed(store: RecordStore, event_key: str) -> DedupResult:
    """Look up ``event_key`` in the ledger without writing anything."""
    existing = await store.find_one(PROCESSED_EVENTS, event_key=event_key)
    if existing is None:
        return DedupResult(was_new=True)
    return DedupResult(was_new=False, existing_todo_id=existing.get("todo_id"))


async def record_processed(store: RecordStore, event: ProcessedEvent) -> DedupResult:
    """Append ``event`` to the ledger.

    Losing the uniqueness race to a concurrent delivery is not an error: the
    result carries ``was_new=False`` and the todo id the winner recorded.
    """
    result = await store.insert_if_absent(
        PROCESSED_EVENTS, event.model_dump(mode="json", exclude_none=True)
    )
    if not result.conflict:
        return DedupResult(was_new=True)

    logger.info("Event %s was recorded concurrently by another delivery", event.event_key)
    return await check_processed(store, event.event_key)


class InFlightKeys:
    """Event keys dispatched to background work in this process but not yet recorded.

    Closes the window between the ledger check and the ledger write for
    deliveries that land on the same process. Cross-process races still fall
    through to the ledger's unique constraint.

    A claim that is never released (the response failed before its
    background job ran) expires after ``ttl`` seconds, so re-reacting
    recovers the event.
    """

    def __init__(self, ttl: float = 600.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._keys: dict[str, float] = {}

    def claim(self, event_key: str) -> bool:
        """Mark ``event_key`` as in flight; False if it already was."""
        now = self._clock()
        claimed_at = self._keys.get(event_key)
        if claimed_at is not None and now - claimed_at < self._ttl:
            return False
        if claimed_at is not None:
            logger.warning("In-flight claim on %s expired; reclaiming", event_key)
        self._keys[event_key] = now
        return True

    def release(self, event_key: str) -> None:
        self._keys.pop(event_key, None)

    def __contains__(self, event_key: object) -> bool:
        claimed_at = self._keys.get(event_key)
        return claimed_at is not None and self._clock() - claimed_at < self._ttl


in_flight = InFlightKeys()
