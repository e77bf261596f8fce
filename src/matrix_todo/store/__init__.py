"""Persistence: record store contract and its Supabase implementation."""

from matrix_todo.store.base import (
    CONNECTIONS,
    EMOJI_SETTINGS,
    PROCESSED_EVENTS,
    TODOS,
    USERS,
    WEBHOOKS,
    InsertResult,
    RecordStore,
)
from matrix_todo.store.client import get_supabase_client, reset_client
from matrix_todo.store.supabase_store import SupabaseStore, get_store

__all__ = [
    "CONNECTIONS",
    "EMOJI_SETTINGS",
    "PROCESSED_EVENTS",
    "TODOS",
    "USERS",
    "WEBHOOKS",
    "InsertResult",
    "RecordStore",
    "SupabaseStore",
    "get_store",
    "get_supabase_client",
    "reset_client",
]
