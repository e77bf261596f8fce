"""Record store contract shared by the Supabase backend and test doubles.

The core logic only needs a handful of operations against named collections.
Uniqueness constraints live in the database; ``insert_if_absent`` reports a
violated constraint as a conflict instead of raising, which is how concurrent
deliveries of the same Slack event are resolved.
"""

from typing import Protocol

from pydantic import BaseModel

CONNECTIONS = "slack_connections"
WEBHOOKS = "user_slack_webhooks"
PROCESSED_EVENTS = "slack_event_processed"
TODOS = "todos"
USERS = "users"
EMOJI_SETTINGS = "user_emoji_settings"


class InsertResult(BaseModel):
    """Outcome of an insert that may lose a uniqueness race."""

    row: dict | None = None
    conflict: bool = False


class RecordStore(Protocol):
    """Minimal async CRUD surface over named record collections."""

    async def find_one(self, collection: str, **filters: object) -> dict | None:
        """Return the first row whose columns equal ``filters``, or None."""
        ...

    async def find_many(self, collection: str, **filters: object) -> list[dict]:
        """Return every row whose columns equal ``filters``."""
        ...

    async def insert_if_absent(self, collection: str, row: dict) -> InsertResult:
        """Insert ``row`` atomically; report a unique violation as ``conflict=True``."""
        ...

    async def create_returning(self, collection: str, row: dict) -> dict:
        """Insert ``row`` and return the stored row in the same round trip."""
        ...

    async def update(
        self, collection: str, record_id: str, values: dict, **expected: object
    ) -> dict | None:
        """Update the row with primary key ``record_id``.

        ``expected`` columns must still hold the given values for the write to
        apply, which gives callers compare-and-set. Returns None when no row
        matched.
        """
        ...

    async def upsert(self, collection: str, row: dict, on_conflict: str) -> dict:
        """Insert or overwrite on the ``on_conflict`` columns and return the row."""
        ...
