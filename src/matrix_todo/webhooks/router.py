"""Webhook management endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from matrix_todo.config import get_settings
from matrix_todo.errors import (
    ConnectionAccessDeniedError,
    ConnectionNotFoundError,
    WebhookAccessDeniedError,
    WebhookNotFoundError,
)
from matrix_todo.store.base import RecordStore
from matrix_todo.store.supabase_store import get_store
from matrix_todo.users.auth import current_user_id
from matrix_todo.webhooks.lifecycle import (
    CREATED_MESSAGE,
    create_or_reactivate,
    deactivate,
    list_webhooks,
    webhook_url,
)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


class CreateWebhookRequest(BaseModel):
    slack_connection_id: str


@router.get("")
async def get_webhooks(
    user_id: str = Depends(current_user_id),
    store: RecordStore = Depends(get_store),
) -> dict:
    """List the user's webhooks with their inbound URLs."""
    base_url = get_settings().app_base_url
    webhooks = await list_webhooks(store, user_id)
    return {
        "webhooks": [
            {**webhook.public_view(), "url": webhook_url(base_url, webhook.webhook_id)}
            for webhook in webhooks
        ]
    }


@router.post("")
async def post_webhook(
    body: CreateWebhookRequest,
    response: Response,
    user_id: str = Depends(current_user_id),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Create the webhook for a Slack connection, or reactivate the existing one."""
    try:
        result = await create_or_reactivate(
            store, user_id, body.slack_connection_id, get_settings().app_base_url
        )
    except ConnectionNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Slack connection not found") from exc
    except ConnectionAccessDeniedError as exc:
        raise HTTPException(status_code=403, detail="Unauthorized access to Slack connection") from exc

    if result.message == CREATED_MESSAGE:
        response.status_code = 201
    return {
        "webhook": result.webhook.public_view(),
        "webhook_url": result.url,
        "message": result.message,
    }


@router.delete("/{webhook_row_id}")
async def delete_webhook(
    webhook_row_id: str,
    user_id: str = Depends(current_user_id),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Deactivate a webhook. The row is kept so it can be reactivated later."""
    try:
        await deactivate(store, webhook_row_id, user_id)
    except WebhookNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Webhook not found") from exc
    except WebhookAccessDeniedError as exc:
        raise HTTPException(status_code=403, detail="Unauthorized access to webhook") from exc
    return {"success": True}
