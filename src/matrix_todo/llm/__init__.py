"""LLM helpers: Gemini client and task title generation."""

from matrix_todo.llm.client import get_gemini_client, reset_client
from matrix_todo.llm.titles import clean_title, generate_title

__all__ = [
    "clean_title",
    "generate_title",
    "get_gemini_client",
    "reset_client",
]
