"""Per-user inbound webhook identities."""

from matrix_todo.webhooks.lifecycle import (
    WebhookResult,
    create_or_reactivate,
    deactivate,
    find_active_webhook,
    list_webhooks,
    webhook_url,
)

__all__ = [
    "WebhookResult",
    "create_or_reactivate",
    "deactivate",
    "find_active_webhook",
    "list_webhooks",
    "webhook_url",
]
