"""User-level models: the app user and their reaction emoji preferences."""

from pydantic import BaseModel


class AppUser(BaseModel):
    """A registered user of the todo app."""

    id: str
    email: str | None = None
    slack_user_id: str | None = None  # e.g., "U0123ABCD"; None until the user sets it


class EmojiSettings(BaseModel):
    """Which reaction emoji (Slack short names, no colons) maps to which urgency."""

    today_emoji: str
    tomorrow_emoji: str
    later_emoji: str


DEFAULT_EMOJI_SETTINGS = EmojiSettings(
    today_emoji="fire",
    tomorrow_emoji="calendar",
    later_emoji="memo",
)
