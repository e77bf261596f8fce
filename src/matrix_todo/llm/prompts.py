"""Prompt text for task title generation."""

# Gemini model constant -- update here when a cheaper model is preferred
GEMINI_MODEL = "gemini-2.5-flash"

# Longer messages are truncated before prompting; the title only needs the gist
MAX_INPUT_CHARS = 4000

TITLE_SYSTEM_PROMPT = """\
You turn chat messages into todo-list headlines.
Write one short headline (at most 8 words) that states the action to take.
Use the same language as the message. No quotes, no trailing punctuation,
no emoji, no prefixes such as "Task:"."""


def build_title_prompt(text: str) -> str:
    """Assemble the user content for a title request."""
    body = text.strip()
    if len(body) > MAX_INPUT_CHARS:
        body = body[:MAX_INPUT_CHARS] + "\n[truncated]"
    return f"Write a headline for this message:\n\n{body}"
