"""Per-user reaction emoji settings: catalogue, validation and persistence."""

import logging

from pydantic import BaseModel

from matrix_todo.errors import InvalidEmojiSettingsError
from matrix_todo.models.user import DEFAULT_EMOJI_SETTINGS, EmojiSettings
from matrix_todo.store.base import EMOJI_SETTINGS, RecordStore

logger = logging.getLogger(__name__)


class AvailableEmoji(BaseModel):
    """An emoji users may pick for an urgency slot."""

    name: str  # Slack short name, as sent in reaction events
    display: str
    label: str


AVAILABLE_EMOJIS: list[AvailableEmoji] = [
    AvailableEmoji(name="fire", display="🔥", label="Urgent"),
    AvailableEmoji(name="calendar", display="📅", label="Planned"),
    AvailableEmoji(name="memo", display="📝", label="Note"),
    AvailableEmoji(name="warning", display="⚠️", label="Warning"),
    AvailableEmoji(name="clock", display="🕐", label="Clock"),
    AvailableEmoji(name="hourglass", display="⏳", label="Hourglass"),
    AvailableEmoji(name="pushpin", display="📌", label="Pin"),
    AvailableEmoji(name="bookmark", display="🔖", label="Bookmark"),
    AvailableEmoji(name="bulb", display="💡", label="Idea"),
    AvailableEmoji(name="star", display="⭐", label="Star"),
    AvailableEmoji(name="zap", display="⚡", label="Zap"),
    AvailableEmoji(name="bell", display="🔔", label="Bell"),
]

_AVAILABLE_NAMES = {emoji.name for emoji in AVAILABLE_EMOJIS}


def validate_emoji_settings(settings: EmojiSettings) -> list[str]:
    """Return validation errors; empty when the settings are acceptable.

    Each slot must name a catalogue emoji and the three slots must differ,
    otherwise one reaction would map to two urgencies.
    """
    errors: list[str] = []
    for slot in ("today_emoji", "tomorrow_emoji", "later_emoji"):
        value = getattr(settings, slot)
        if value not in _AVAILABLE_NAMES:
            errors.append(f"Invalid {slot}: {value}")

    if len({settings.today_emoji, settings.tomorrow_emoji, settings.later_emoji}) < 3:
        errors.append("Each emoji must be unique across today, tomorrow, and later settings")
    return errors


def is_default(settings: EmojiSettings) -> bool:
    return settings == DEFAULT_EMOJI_SETTINGS


async def get_emoji_settings(store: RecordStore, user_id: str) -> EmojiSettings | None:
    """Stored settings for ``user_id``, or None when the user never configured any."""
    row = await store.find_one(EMOJI_SETTINGS, user_id=user_id)
    if row is None:
        return None
    return EmojiSettings.model_validate(row)


async def update_emoji_settings(
    store: RecordStore, user_id: str, settings: EmojiSettings
) -> EmojiSettings:
    """Validate and upsert ``settings`` for ``user_id``.

    Raises:
        InvalidEmojiSettingsError: unknown or repeated emoji.
    """
    errors = validate_emoji_settings(settings)
    if errors:
        raise InvalidEmojiSettingsError(errors)

    row = await store.upsert(
        EMOJI_SETTINGS,
        {"user_id": user_id, **settings.model_dump()},
        on_conflict="user_id",
    )
    logger.info("Updated emoji settings for user %s", user_id)
    return EmojiSettings.model_validate(row)
