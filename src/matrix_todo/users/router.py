"""Emoji settings endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException

from matrix_todo.errors import InvalidEmojiSettingsError
from matrix_todo.models.user import DEFAULT_EMOJI_SETTINGS, EmojiSettings
from matrix_todo.store.base import RecordStore
from matrix_todo.store.supabase_store import get_store
from matrix_todo.users.auth import current_user_id
from matrix_todo.users.emoji import (
    AVAILABLE_EMOJIS,
    get_emoji_settings,
    is_default,
    update_emoji_settings,
)

router = APIRouter(prefix="/user", tags=["user"])


@router.get("/emoji-settings")
async def read_emoji_settings(
    user_id: str = Depends(current_user_id),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Current emoji settings (defaults if unset) plus the selectable catalogue."""
    settings = await get_emoji_settings(store, user_id) or DEFAULT_EMOJI_SETTINGS
    return {
        "settings": settings.model_dump(),
        "is_default": is_default(settings),
        "available_emojis": [emoji.model_dump() for emoji in AVAILABLE_EMOJIS],
    }


@router.put("/emoji-settings")
async def write_emoji_settings(
    settings: EmojiSettings,
    user_id: str = Depends(current_user_id),
    store: RecordStore = Depends(get_store),
) -> dict:
    """Replace the user's emoji settings."""
    try:
        saved = await update_emoji_settings(store, user_id, settings)
    except InvalidEmojiSettingsError as exc:
        raise HTTPException(status_code=400, detail=exc.errors) from exc
    return {"settings": saved.model_dump(), "message": "Emoji settings updated"}
