"""Tests for Slack payload decoding and integration row models."""

import json

import pytest
from pydantic import ValidationError

from matrix_todo.errors import InvalidPayloadError
from matrix_todo.models.slack import (
    ChallengeRequest,
    EventCallback,
    OtherEvent,
    ReactionAddedEvent,
    SlackConnection,
    SlackWebhook,
    UnknownPayload,
    parse_payload,
)


def _raw(payload) -> bytes:
    return json.dumps(payload).encode()


def test_challenge_payload():
    payload = parse_payload(_raw({"type": "url_verification", "challenge": "abc123", "token": "t"}))
    assert isinstance(payload, ChallengeRequest)
    assert payload.challenge == "abc123"


def test_challenge_field_wins_over_type():
    payload = parse_payload(_raw({"type": "event_callback", "challenge": "abc"}))
    assert isinstance(payload, ChallengeRequest)


def test_reaction_added_event():
    payload = parse_payload(
        _raw(
            {
                "type": "event_callback",
                "team_id": "T1",
                "event": {
                    "type": "reaction_added",
                    "user": "U1",
                    "reaction": "fire",
                    "item": {"type": "message", "channel": "C1", "ts": "1.2"},
                },
            }
        )
    )
    assert isinstance(payload, EventCallback)
    assert isinstance(payload.event, ReactionAddedEvent)
    assert payload.event.item.channel == "C1"


def test_other_inner_event():
    payload = parse_payload(
        _raw({"type": "event_callback", "event": {"type": "reaction_removed", "user": "U1"}})
    )
    assert isinstance(payload.event, OtherEvent)
    assert payload.event.type == "reaction_removed"


def test_unknown_outer_type():
    payload = parse_payload(_raw({"type": "app_rate_limited"}))
    assert isinstance(payload, UnknownPayload)
    assert payload.type == "app_rate_limited"


@pytest.mark.parametrize("raw", [b"not json", b"", b"[1, 2]", b'"string"'])
def test_invalid_bodies(raw: bytes):
    with pytest.raises(InvalidPayloadError):
        parse_payload(raw)


def test_event_callback_without_event():
    with pytest.raises(InvalidPayloadError):
        parse_payload(_raw({"type": "event_callback"}))


def _webhook() -> SlackWebhook:
    return SlackWebhook(
        id="row-1",
        user_id="user-1",
        slack_connection_id="conn-1",
        webhook_id="public",
        webhook_secret="secret-value",
        is_active=True,
    )


def test_with_active_returns_copy():
    webhook = _webhook()
    inactive = webhook.with_active(False)

    assert inactive.is_active is False
    assert webhook.is_active is True


def test_public_view_excludes_secret():
    view = _webhook().public_view()
    assert "webhook_secret" not in view
    assert view["webhook_id"] == "public"


def test_secrets_not_in_repr():
    assert "secret-value" not in repr(_webhook())
    connection = SlackConnection(
        id="c",
        user_id="u",
        workspace_id="T0ABC",
        workspace_name="w",
        team_name="t",
        access_token="xoxp-hidden",
        scope="s",
    )
    assert "xoxp-hidden" not in repr(connection)


def test_workspace_id_format():
    with pytest.raises(ValidationError):
        SlackConnection(
            id="c",
            user_id="u",
            workspace_id="not-a-team",
            workspace_name="w",
            team_name="t",
            access_token="x",
            scope="s",
        )
