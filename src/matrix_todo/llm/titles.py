"""Task title generation via Gemini.

Public API:
    generate_title(text) -> str
        Short headline for a chat message. Raises TitleGenerationError on
        any failure so callers can substitute their own fallback title.
"""

import logging

import httpx
from google import genai
from google.genai import types
from google.genai.errors import APIError, ClientError, ServerError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from matrix_todo.errors import TitleGenerationError
from matrix_todo.llm.client import get_gemini_client
from matrix_todo.llm.prompts import GEMINI_MODEL, TITLE_SYSTEM_PROMPT, build_title_prompt

logger = logging.getLogger(__name__)

MAX_TITLE_CHARS = 60
EMPTY_RESPONSE_TITLE = "Task"


def _is_retryable(error: BaseException) -> bool:
    """Retry server errors (5xx) and rate limits (429); nothing else."""
    if isinstance(error, ServerError):
        return True
    if isinstance(error, ClientError) and error.code == 429:
        return True
    return False


@retry(
    retry=retry_if_exception(_is_retryable),
    wait=wait_exponential_jitter(initial=0.5, max=4, jitter=1),
    stop=stop_after_attempt(3),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _call_gemini(client: genai.Client, user_content: str) -> object:
    """Call Gemini for a single headline, retrying on transient errors."""
    return await client.aio.models.generate_content(
        model=GEMINI_MODEL,
        contents=user_content,
        config=types.GenerateContentConfig(
            system_instruction=TITLE_SYSTEM_PROMPT,
            temperature=0.7,
            max_output_tokens=50,
        ),
    )


def clean_title(raw: str | None) -> str:
    """Normalize model output: first non-empty line, unquoted, length-capped."""
    lines = [line.strip() for line in (raw or "").splitlines() if line.strip()]
    if not lines:
        return EMPTY_RESPONSE_TITLE
    title = lines[0].strip("\"'`「」 ")
    if len(title) > MAX_TITLE_CHARS:
        title = title[: MAX_TITLE_CHARS - 1].rstrip() + "…"
    return title or EMPTY_RESPONSE_TITLE


async def generate_title(text: str, client: genai.Client | None = None) -> str:
    """Generate a todo headline for ``text``.

    Raises:
        TitleGenerationError: empty input, no API key configured, or the
            Gemini call failed after retries (API or transport error).
    """
    if not text or not text.strip():
        raise TitleGenerationError("Content is required to generate a title")

    client = client or get_gemini_client()
    try:
        response = await _call_gemini(client, build_title_prompt(text))
    except (APIError, httpx.HTTPError) as exc:
        raise TitleGenerationError(f"Gemini title request failed: {exc}") from exc

    title = clean_title(response.text)
    logger.info("Generated title (%d chars)", len(title))
    return title
