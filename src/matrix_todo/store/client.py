"""Async Supabase client singleton.

Creates a cached AsyncClient configured with the service-role key from
application settings. The service key bypasses row-level security, which the
webhook path needs because inbound Slack requests carry no user session.
"""

from supabase import AsyncClient, acreate_client

from matrix_todo.config import get_settings

_client: AsyncClient | None = None


async def get_supabase_client() -> AsyncClient:
    """Return a cached async Supabase client instance.

    Creates the client on first call using supabase_url and
    supabase_service_key from settings. Subsequent calls return the cached
    instance.
    """
    global _client
    if _client is None:
        settings = get_settings()
        _client = await acreate_client(settings.supabase_url, settings.supabase_service_key)
    return _client


def reset_client() -> None:
    """Reset the cached client instance. Used for testing."""
    global _client
    _client = None
