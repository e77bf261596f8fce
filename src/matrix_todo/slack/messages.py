"""Fetch the text of a reacted-to Slack message.

Top-level messages are found with a single ``conversations.history`` lookup
pinned to the message ts. Thread replies never appear in channel history, so
on a miss the recent thread parents in the channel are scanned with
``conversations.replies``.
"""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from matrix_todo.models.slack import SlackMessage
from matrix_todo.slack.client import get_slack_client

logger = logging.getLogger(__name__)

_THREAD_SCAN_LIMIT = 100
_REPLIES_LIMIT = 200


async def fetch_message(channel: str, ts: str, access_token: str) -> SlackMessage | None:
    """Return the message at ``ts`` in ``channel``, or None if it cannot be found.

    Slack API errors (missing scope, channel not found, revoked token) are
    logged and reported as None; the caller treats that as "nothing to turn
    into a task".
    """
    if not access_token:
        logger.warning("No access token for channel %s; cannot fetch message", channel)
        return None

    client = get_slack_client(access_token)

    message = await _find_in_history(client, channel, ts)
    if message is not None:
        return message

    logger.info("Message %s not in channel history of %s, scanning threads", ts, channel)
    message = await _find_in_threads(client, channel, ts)
    if message is None:
        logger.warning("No message found in channel or threads for %s/%s", channel, ts)
    return message


async def _find_in_history(client: AsyncWebClient, channel: str, ts: str) -> SlackMessage | None:
    try:
        response = await client.conversations_history(
            channel=channel, latest=ts, oldest=ts, inclusive=True, limit=1
        )
    except SlackApiError as exc:
        logger.warning("conversations.history failed for %s: %s", channel, exc.response.get("error"))
        return None

    for raw in response.get("messages") or []:
        if raw.get("ts") == ts:
            return _to_message(raw, channel)
    return None


async def _find_in_threads(client: AsyncWebClient, channel: str, ts: str) -> SlackMessage | None:
    try:
        response = await client.conversations_history(channel=channel, limit=_THREAD_SCAN_LIMIT)
    except SlackApiError as exc:
        logger.warning("Channel scan failed for %s: %s", channel, exc.response.get("error"))
        return None

    parents = [m for m in response.get("messages") or [] if m.get("reply_count", 0) > 0]
    logger.debug("Found %d thread parents in %s", len(parents), channel)

    for parent in parents:
        try:
            replies = await client.conversations_replies(
                channel=channel, ts=parent["ts"], limit=_REPLIES_LIMIT, inclusive=True
            )
        except SlackApiError as exc:
            logger.warning(
                "conversations.replies failed for %s/%s: %s",
                channel,
                parent["ts"],
                exc.response.get("error"),
            )
            continue
        for raw in replies.get("messages") or []:
            if raw.get("ts") == ts:
                return _to_message(raw, channel)
    return None


def _to_message(raw: dict, channel: str) -> SlackMessage:
    return SlackMessage(
        text=raw.get("text") or "",
        ts=raw["ts"],
        user=raw.get("user"),
        channel=channel,
    )
