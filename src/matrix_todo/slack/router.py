"""Inbound Slack Events API webhook router."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from matrix_todo.errors import (
    ConnectionNotFoundError,
    InvalidPayloadError,
    SlackUserNotConfiguredError,
    WebhookNotFoundError,
)
from matrix_todo.models.slack import parse_payload
from matrix_todo.slack.handlers import handle_webhook_event
from matrix_todo.slack.verification import verified_body
from matrix_todo.store.base import RecordStore
from matrix_todo.store.supabase_store import get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks/slack", tags=["slack"])


@router.post("/events/{webhook_id}")
async def slack_events(
    webhook_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verified_body),
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    """Receive Slack Events API deliveries for one user's webhook.

    Responds as soon as the synchronous gates pass; task creation continues
    in the background. Retries (X-Slack-Retry-Num) go through the same path
    and are absorbed by the dedup ledger.
    """
    retry_num = request.headers.get("X-Slack-Retry-Num")
    if retry_num:
        logger.info(
            "Slack retry %s for webhook %s (%s)",
            retry_num,
            webhook_id,
            request.headers.get("X-Slack-Retry-Reason", "unknown"),
        )

    try:
        payload = parse_payload(body)
    except InvalidPayloadError as exc:
        logger.warning("Invalid payload for webhook %s: %s", webhook_id, exc)
        raise HTTPException(status_code=400, detail="Invalid JSON") from exc

    try:
        result = await handle_webhook_event(store, webhook_id, payload, background_tasks)
    except WebhookNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Webhook not found") from exc
    except SlackUserNotConfiguredError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ConnectionNotFoundError as exc:
        logger.error("Webhook %s points at a missing Slack connection", webhook_id)
        raise HTTPException(status_code=500, detail="Slack connection not found") from exc

    if result.challenge is not None:
        return JSONResponse({"challenge": result.challenge})

    content: dict = {"ok": True, "message": result.message}
    if result.existing_todo_id:
        content["existing_todo_id"] = result.existing_todo_id
    return JSONResponse(content)


@router.get("/events/{webhook_id}")
async def slack_events_status(webhook_id: str) -> dict:
    """Liveness check for a webhook URL (handy when pasting it into Slack)."""
    return {
        "webhook_id": webhook_id,
        "status": "active",
        "message": "Slack Events API webhook endpoint",
    }
