"""User-facing settings and authentication."""

from matrix_todo.users.auth import current_user_id
from matrix_todo.users.emoji import (
    AVAILABLE_EMOJIS,
    get_emoji_settings,
    update_emoji_settings,
    validate_emoji_settings,
)

__all__ = [
    "AVAILABLE_EMOJIS",
    "current_user_id",
    "get_emoji_settings",
    "update_emoji_settings",
    "validate_emoji_settings",
]
