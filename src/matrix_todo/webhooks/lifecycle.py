"""Webhook lifecycle: create, reactivate, deactivate and list per-user webhooks.

A user has at most one webhook row per Slack connection. Removing a webhook
only deactivates it; asking for one again flips the same row back on, so the
URL pasted into Slack keeps working.
"""

import logging
import secrets
from datetime import datetime, timezone

from pydantic import BaseModel

from matrix_todo.errors import (
    ConnectionAccessDeniedError,
    ConnectionNotFoundError,
    StoreError,
    WebhookAccessDeniedError,
    WebhookNotFoundError,
)
from matrix_todo.models.slack import SlackConnection, SlackWebhook
from matrix_todo.store.base import CONNECTIONS, WEBHOOKS, RecordStore

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Webhook created successfully"
REACTIVATED_MESSAGE = "Webhook reactivated successfully"


class WebhookResult(BaseModel):
    """A webhook together with the public URL Slack should deliver to."""

    webhook: SlackWebhook
    url: str
    message: str


def webhook_url(base_url: str, webhook_id: str) -> str:
    """Inbound URL for a webhook. Embeds only the public id, never the secret."""
    return f"{base_url.rstrip('/')}/webhooks/slack/events/{webhook_id}"


def generate_identity() -> tuple[str, str]:
    """Fresh unguessable (webhook_id, webhook_secret) pair."""
    return secrets.token_urlsafe(32), secrets.token_hex(64)


async def create_or_reactivate(
    store: RecordStore, user_id: str, connection_id: str, base_url: str
) -> WebhookResult:
    """Return the user's webhook for ``connection_id``, creating it if needed.

    Raises:
        ConnectionNotFoundError: no such connection.
        ConnectionAccessDeniedError: the connection belongs to another user.
    """
    row = await store.find_one(CONNECTIONS, id=connection_id)
    if row is None:
        raise ConnectionNotFoundError(connection_id)
    connection = SlackConnection.model_validate(row)
    if connection.user_id != user_id:
        raise ConnectionAccessDeniedError(connection_id)

    existing = await store.find_one(WEBHOOKS, user_id=user_id, slack_connection_id=connection_id)
    if existing is not None:
        webhook = await _reactivate(store, SlackWebhook.model_validate(existing))
        return WebhookResult(
            webhook=webhook, url=webhook_url(base_url, webhook.webhook_id), message=REACTIVATED_MESSAGE
        )

    webhook_id, webhook_secret = generate_identity()
    inserted = await store.insert_if_absent(
        WEBHOOKS,
        {
            "user_id": user_id,
            "slack_connection_id": connection_id,
            "webhook_id": webhook_id,
            "webhook_secret": webhook_secret,
            "is_active": True,
            "event_count": 0,
        },
    )

    if inserted.conflict:
        # A concurrent request created the row between our read and insert.
        raced = await store.find_one(WEBHOOKS, user_id=user_id, slack_connection_id=connection_id)
        if raced is None:
            raise StoreError("Webhook insert conflicted but no existing row was found")
        webhook = await _reactivate(store, SlackWebhook.model_validate(raced))
        return WebhookResult(
            webhook=webhook, url=webhook_url(base_url, webhook.webhook_id), message=REACTIVATED_MESSAGE
        )

    if inserted.row is None:
        raise StoreError("Webhook insert returned no row")
    webhook = SlackWebhook.model_validate(inserted.row)
    logger.info("Created webhook %s for user %s", webhook.id, user_id)
    return WebhookResult(
        webhook=webhook, url=webhook_url(base_url, webhook.webhook_id), message=CREATED_MESSAGE
    )


async def _reactivate(store: RecordStore, webhook: SlackWebhook) -> SlackWebhook:
    activated = webhook.with_active(True)
    if not webhook.is_active:
        row = await store.update(
            WEBHOOKS,
            webhook.id,
            {"is_active": True, "updated_at": datetime.now(timezone.utc).isoformat()},
        )
        if row is not None:
            activated = SlackWebhook.model_validate(row)
        logger.info("Reactivated webhook %s", webhook.id)
    return activated


async def deactivate(store: RecordStore, webhook_row_id: str, user_id: str) -> None:
    """Turn a webhook off without deleting it.

    Raises:
        WebhookNotFoundError: no such webhook row.
        WebhookAccessDeniedError: the webhook belongs to another user.
    """
    row = await store.find_one(WEBHOOKS, id=webhook_row_id)
    if row is None:
        raise WebhookNotFoundError(webhook_row_id)
    webhook = SlackWebhook.model_validate(row)
    if webhook.user_id != user_id:
        raise WebhookAccessDeniedError(webhook_row_id)

    await store.update(
        WEBHOOKS,
        webhook.id,
        {"is_active": False, "updated_at": datetime.now(timezone.utc).isoformat()},
    )
    logger.info("Deactivated webhook %s for user %s", webhook.id, user_id)


async def list_webhooks(store: RecordStore, user_id: str) -> list[SlackWebhook]:
    rows = await store.find_many(WEBHOOKS, user_id=user_id)
    return [SlackWebhook.model_validate(row) for row in rows]


async def find_active_webhook(store: RecordStore, webhook_id: str) -> SlackWebhook:
    """Look up an inbound webhook by its public id.

    Raises:
        WebhookNotFoundError: unknown id, or the webhook was deactivated.
    """
    row = await store.find_one(WEBHOOKS, webhook_id=webhook_id)
    if row is None:
        raise WebhookNotFoundError(webhook_id)
    webhook = SlackWebhook.model_validate(row)
    if not webhook.is_active:
        raise WebhookNotFoundError(webhook_id)
    return webhook
