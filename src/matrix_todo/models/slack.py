"""Slack-side models: inbound webhook payloads and persisted integration rows.

Inbound payloads are decoded once at the HTTP boundary into a closed set of
shapes (``ChallengeRequest``, ``EventCallback``, ``UnknownPayload``) so the
handler can dispatch with ``isinstance`` instead of probing raw dicts.
"""

import json
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from matrix_todo.errors import InvalidPayloadError


class ChallengeRequest(BaseModel):
    """Slack's URL-verification handshake; the token must be echoed back."""

    challenge: str
    type: str = "url_verification"


class ReactionItem(BaseModel):
    """The message a reaction was attached to."""

    type: str = "message"
    channel: str
    ts: str  # Slack message ts, e.g., "1234567890.123456"


class ReactionAddedEvent(BaseModel):
    """A ``reaction_added`` event: ``user`` attached ``reaction`` to ``item``."""

    type: Literal["reaction_added"]
    user: str
    reaction: str
    item: ReactionItem
    item_user: str | None = None
    event_ts: str | None = None


class OtherEvent(BaseModel):
    """Any inner event type this service does not act on."""

    model_config = ConfigDict(extra="allow")

    type: str = ""


class EventCallback(BaseModel):
    """Outer ``event_callback`` envelope."""

    type: Literal["event_callback"]
    team_id: str | None = None
    event_id: str | None = None
    event: ReactionAddedEvent | OtherEvent = Field(union_mode="left_to_right")


class UnknownPayload(BaseModel):
    """Any other payload type; acknowledged and ignored."""

    type: str | None = None


SlackPayload = ChallengeRequest | EventCallback | UnknownPayload


def parse_payload(raw: bytes) -> SlackPayload:
    """Decode a raw webhook body into one of the known payload shapes.

    A body carrying a ``challenge`` field is always a ``ChallengeRequest``,
    whatever its ``type``.

    Raises:
        InvalidPayloadError: body is not a JSON object, or is an
            ``event_callback`` missing its ``event``.
    """
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise InvalidPayloadError("Invalid JSON") from exc

    if not isinstance(data, dict):
        raise InvalidPayloadError("Payload must be a JSON object")

    if data.get("challenge"):
        return ChallengeRequest(challenge=str(data["challenge"]))

    if data.get("type") == "event_callback":
        try:
            return EventCallback.model_validate(data)
        except ValidationError as exc:
            raise InvalidPayloadError("Malformed event_callback payload") from exc

    return UnknownPayload(type=data.get("type"))


class SlackConnection(BaseModel):
    """One OAuth grant of a user to a Slack workspace."""

    id: str
    user_id: str
    workspace_id: str = Field(pattern=r"^T[A-Z0-9]+$")
    workspace_name: str
    team_name: str
    access_token: str = Field(repr=False)
    scope: str
    created_at: datetime | None = None


class SlackWebhook(BaseModel):
    """Per-(user, connection) inbound webhook identity."""

    id: str
    user_id: str
    slack_connection_id: str
    webhook_id: str
    webhook_secret: str = Field(repr=False)
    is_active: bool = True
    last_event_at: datetime | None = None
    event_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_active(self, active: bool) -> "SlackWebhook":
        """Return a copy with ``is_active`` set; the original is untouched."""
        return self.model_copy(update={"is_active": active})

    def public_view(self) -> dict:
        """Serializable form safe to return to clients (no secret)."""
        return self.model_dump(mode="json", exclude={"webhook_secret"})


class ProcessedEvent(BaseModel):
    """A dedup ledger row. Append-only."""

    id: str | None = None
    event_key: str
    user_id: str
    channel_id: str
    message_ts: str
    reaction: str
    todo_id: str | None = None
    processed_at: datetime | None = None


class SlackMessage(BaseModel):
    """The reacted-to message, as returned by the Slack Web API."""

    text: str = ""
    ts: str
    user: str | None = None
    channel: str | None = None
