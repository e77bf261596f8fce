"""Slack ingress: signature verification, event dedup, message fetch and reaction handling."""

from matrix_todo.slack.client import get_slack_client, reset_clients
from matrix_todo.slack.dedup import build_event_key, check_processed, record_processed
from matrix_todo.slack.messages import fetch_message
from matrix_todo.slack.router import router
from matrix_todo.slack.verification import verify_signature

__all__ = [
    "build_event_key",
    "check_processed",
    "fetch_message",
    "get_slack_client",
    "record_processed",
    "reset_clients",
    "router",
    "verify_signature",
]
