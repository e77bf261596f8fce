"""Data models and enums for the todo app's Slack ingestion."""

from matrix_todo.models.slack import (
    ChallengeRequest,
    EventCallback,
    OtherEvent,
    ProcessedEvent,
    ReactionAddedEvent,
    ReactionItem,
    SlackConnection,
    SlackMessage,
    SlackPayload,
    SlackWebhook,
    UnknownPayload,
    parse_payload,
)
from matrix_todo.models.todo import CreatedVia, NewTodo, Todo, TodoStatus, Urgency
from matrix_todo.models.user import DEFAULT_EMOJI_SETTINGS, AppUser, EmojiSettings

__all__ = [
    "ChallengeRequest",
    "EventCallback",
    "OtherEvent",
    "ReactionAddedEvent",
    "ReactionItem",
    "SlackPayload",
    "UnknownPayload",
    "parse_payload",
    "SlackConnection",
    "SlackWebhook",
    "ProcessedEvent",
    "SlackMessage",
    "CreatedVia",
    "NewTodo",
    "Todo",
    "TodoStatus",
    "Urgency",
    "AppUser",
    "EmojiSettings",
    "DEFAULT_EMOJI_SETTINGS",
]
