"""Reaction event processing: synchronous gates, then background task creation.

The webhook handler runs the gates that decide the response (payload type,
webhook lookup, emoji, owner configuration, ownership, dedup) before
responding. Slack and Gemini calls and the todo write happen in a background
job after the response has been sent.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

from fastapi import BackgroundTasks
from pydantic import BaseModel

from matrix_todo.config import get_settings
from matrix_todo.errors import (
    ConnectionNotFoundError,
    SlackUserNotConfiguredError,
    TitleGenerationError,
)
from matrix_todo.llm.titles import generate_title
from matrix_todo.models.slack import (
    ChallengeRequest,
    EventCallback,
    ProcessedEvent,
    ReactionAddedEvent,
    SlackConnection,
    SlackPayload,
    SlackWebhook,
)
from matrix_todo.models.todo import CreatedVia, Urgency
from matrix_todo.models.user import AppUser
from matrix_todo.slack.dedup import build_event_key, check_processed, in_flight, record_processed
from matrix_todo.slack.messages import fetch_message
from matrix_todo.store.base import CONNECTIONS, USERS, WEBHOOKS, RecordStore
from matrix_todo.tasks.service import build_new_todo, create_todo
from matrix_todo.tasks.urgency import resolve_urgency
from matrix_todo.users.emoji import get_emoji_settings
from matrix_todo.webhooks.lifecycle import find_active_webhook

logger = logging.getLogger(__name__)

QUEUED = "Event received and queued for processing"
ALREADY_PROCESSED = "Event already processed"
EVENT_IGNORED = "Event type ignored"
EMOJI_NOT_CONFIGURED = "Emoji not configured for task creation"
REACTOR_NOT_REGISTERED = "Reaction ignored - reacting Slack user is not registered"
NOT_OWNER = "Reaction ignored - only the webhook owner can create tasks"

# Compare-and-set retries for webhook stats under concurrent deliveries
_STATS_ATTEMPTS = 5


class ProcessingResult(BaseModel):
    """Outcome of the synchronous phase, rendered by the router."""

    message: str
    challenge: str | None = None
    existing_todo_id: str | None = None
    queued: bool = False


class ReactionJob(BaseModel):
    """Everything the background phase needs, resolved while the request was open."""

    event_key: str
    event: ReactionAddedEvent
    urgency: Urgency
    webhook: SlackWebhook
    connection: SlackConnection


async def handle_webhook_event(
    store: RecordStore,
    webhook_id: str,
    payload: SlackPayload,
    background_tasks: BackgroundTasks,
) -> ProcessingResult:
    """Run the synchronous gates for one verified webhook delivery.

    Gates, in order (each may end processing):
    1. URL-verification challenge -> echo token
    2. Not a reaction_added event_callback -> ignore
    3. Unknown or inactive webhook -> WebhookNotFoundError
    4. Emoji not mapped to an urgency -> ignore
    5. Owner has no Slack user ID -> SlackUserNotConfiguredError
    6. Reacting Slack user not registered -> ignore
    7. Reactor is not the webhook owner -> ignore
    8. Event key already in flight or in the ledger -> already processed
    Otherwise the task creation is queued as a background job.
    """
    if isinstance(payload, ChallengeRequest):
        logger.info("URL verification challenge received for webhook %s", webhook_id)
        return ProcessingResult(message="challenge", challenge=payload.challenge)

    if not isinstance(payload, EventCallback) or not isinstance(payload.event, ReactionAddedEvent):
        logger.debug("Ignoring payload for webhook %s: %s", webhook_id, payload.type)
        return ProcessingResult(message=EVENT_IGNORED)

    event = payload.event
    webhook = await find_active_webhook(store, webhook_id)

    emoji_settings = await get_emoji_settings(store, webhook.user_id)
    urgency = resolve_urgency(event.reaction, emoji_settings)
    if urgency is None:
        logger.debug("Reaction %s is not a task emoji for user %s", event.reaction, webhook.user_id)
        return ProcessingResult(message=EMOJI_NOT_CONFIGURED)

    owner_row = await store.find_one(USERS, id=webhook.user_id)
    owner = AppUser.model_validate(owner_row) if owner_row else None
    if owner is None or not owner.slack_user_id:
        raise SlackUserNotConfiguredError()

    reactor_row = await store.find_one(USERS, slack_user_id=event.user)
    if reactor_row is None:
        logger.info("Reaction from unregistered Slack user %s ignored", event.user)
        return ProcessingResult(message=REACTOR_NOT_REGISTERED)

    if event.user != owner.slack_user_id or reactor_row.get("id") != owner.id:
        logger.info(
            "Reaction by %s on webhook owned by %s ignored", event.user, owner.slack_user_id
        )
        return ProcessingResult(message=NOT_OWNER)

    event_key = build_event_key(event.item.channel, event.item.ts, event.reaction, event.user)
    if not in_flight.claim(event_key):
        logger.info("Event %s is already being processed", event_key)
        return ProcessingResult(message=ALREADY_PROCESSED)

    # Until add_task succeeds the key is released here, not by the job
    try:
        dedup = await check_processed(store, event_key)
        if not dedup.was_new:
            in_flight.release(event_key)
            logger.info("Event %s already processed (todo %s)", event_key, dedup.existing_todo_id)
            return ProcessingResult(
                message=ALREADY_PROCESSED, existing_todo_id=dedup.existing_todo_id
            )

        connection_row = await store.find_one(CONNECTIONS, id=webhook.slack_connection_id)
        if connection_row is None:
            raise ConnectionNotFoundError(webhook.slack_connection_id)

        job = ReactionJob(
            event_key=event_key,
            event=event,
            urgency=urgency,
            webhook=webhook,
            connection=SlackConnection.model_validate(connection_row),
        )
        background_tasks.add_task(run_detached, process_reaction, store, job)
    except Exception:
        in_flight.release(event_key)
        raise

    logger.info("Queued task creation for event %s (urgency=%s)", event_key, urgency.value)
    return ProcessingResult(message=QUEUED, queued=True)


async def run_detached(
    job_fn: Callable[..., Awaitable[object]], *args: object, **kwargs: object
) -> None:
    """Run a background job; failures are logged and never propagated or retried.

    The HTTP response has already been sent, so there is no caller to report
    to. A lost reaction is recovered by the user reacting again, which the
    ledger makes safe.
    """
    try:
        await job_fn(*args, **kwargs)
    except Exception:
        logger.error("Background job %s failed", job_fn.__name__, exc_info=True)


async def process_reaction(store: RecordStore, job: ReactionJob) -> str | None:
    """Turn a gated reaction into a todo; return the new todo id.

    Returns None when the reacted-to message cannot be fetched or has no
    text. Title generation failures fall back to a synthetic title. Ledger
    and webhook stats writes happen after the todo is committed and are
    best-effort: a failure there is logged, the todo is kept.
    """
    settings = get_settings()
    event = job.event
    try:
        try:
            async with asyncio.timeout(settings.message_fetch_timeout):
                message = await fetch_message(
                    event.item.channel, event.item.ts, job.connection.access_token
                )
        except TimeoutError:
            logger.warning("Message fetch timed out for event %s", job.event_key)
            return None

        if message is None or not message.text.strip():
            logger.info("No message text for event %s; no task created", job.event_key)
            return None

        title = await _title_for(message.text, event.reaction, settings.title_timeout)

        now = datetime.now(timezone.utc)
        todo = await create_todo(
            store,
            build_new_todo(
                user_id=job.webhook.user_id,
                title=title,
                body=message.text,
                urgency=job.urgency,
                now=now,
                created_via=CreatedVia.SLACK_WEBHOOK,
            ),
        )

        await _record_event(store, job, todo.id)
        await _bump_webhook_stats(store, job.webhook, now)
        return todo.id
    finally:
        in_flight.release(job.event_key)


def fallback_title(reaction: str) -> str:
    return f"Slack reaction: {reaction}"


async def _title_for(text: str, reaction: str, timeout: float) -> str:
    try:
        async with asyncio.timeout(timeout):
            return await generate_title(text)
    except (TitleGenerationError, TimeoutError) as exc:
        logger.warning("Title generation failed, using fallback: %s", exc)
    except Exception:
        logger.warning("Unexpected title generation error, using fallback", exc_info=True)
    return fallback_title(reaction)


async def _record_event(store: RecordStore, job: ReactionJob, todo_id: str) -> None:
    event = job.event
    try:
        result = await record_processed(
            store,
            ProcessedEvent(
                event_key=job.event_key,
                user_id=job.webhook.user_id,
                channel_id=event.item.channel,
                message_ts=event.item.ts,
                reaction=event.reaction,
                todo_id=todo_id,
            ),
        )
    except Exception:
        logger.error("Failed to record processed event %s", job.event_key, exc_info=True)
        return

    if not result.was_new:
        logger.warning(
            "Event %s was recorded by a concurrent delivery (todo %s); todo %s is a duplicate",
            job.event_key,
            result.existing_todo_id,
            todo_id,
        )


async def _bump_webhook_stats(store: RecordStore, webhook: SlackWebhook, now: datetime) -> None:
    """Increment ``event_count`` with compare-and-set so concurrent jobs never lose a count."""
    try:
        for _ in range(_STATS_ATTEMPTS):
            current = await store.find_one(WEBHOOKS, id=webhook.id)
            if current is None:
                logger.warning("Webhook %s vanished before its stats were updated", webhook.id)
                return
            count = current.get("event_count") or 0
            updated = await store.update(
                WEBHOOKS,
                webhook.id,
                {"event_count": count + 1, "last_event_at": now.isoformat()},
                event_count=current.get("event_count"),
            )
            if updated is not None:
                return
        logger.warning(
            "Gave up updating stats for webhook %s after %d attempts", webhook.id, _STATS_ATTEMPTS
        )
    except Exception:
        logger.error("Failed to update stats for webhook %s", webhook.id, exc_info=True)
