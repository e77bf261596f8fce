"""Shared Gemini client for title generation."""

from functools import lru_cache

from google import genai
from google.genai import types

from matrix_todo.config import get_settings
from matrix_todo.errors import TitleGenerationError

# Per-request HTTP timeout; kept below Settings.title_timeout
HTTP_TIMEOUT_MS = 10_000


@lru_cache
def get_gemini_client() -> genai.Client:
    """Gemini client built from ``gemini_api_key`` on first use.

    No HttpRetryOptions are configured: ``titles`` retries with tenacity.

    Raises:
        TitleGenerationError: ``gemini_api_key`` is not configured. Failed
            attempts are not cached.
    """
    settings = get_settings()
    if not settings.gemini_api_key:
        raise TitleGenerationError("GEMINI_API_KEY is not set")
    return genai.Client(
        api_key=settings.gemini_api_key,
        http_options=types.HttpOptions(timeout=HTTP_TIMEOUT_MS),
    )


def reset_client() -> None:
    """Drop the cached client. Used for testing."""
    get_gemini_client.cache_clear()
