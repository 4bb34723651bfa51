"""
core.api.openai_client

Thin wrapper around the OpenAI Chat Completions API for GuessWho.

Used by:
  - core/assistant/backends.py (ChatCompletionsBackend)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from configs.settings import settings
from exceptions.exceptions import AssistantError


# -------------------------------------------------------------------
# Client + config
# -------------------------------------------------------------------

# Shared client, created on first use so that importing this module does
# not require OPENAI_API_KEY.
_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )
    return _client


# -------------------------------------------------------------------
# Internal helpers
# -------------------------------------------------------------------


def _extract_json_from_text(text: str) -> str:
    """
    Normalize model text output into a raw JSON string.

    Handles common patterns like Markdown ```json fenced blocks and
    extra prose around the JSON object by extracting the first JSON-like
    block from the text.
    """
    text = text.strip()

    # Strip Markdown code fences if present.
    if text.startswith("```"):
        lines = text.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines).strip()

    # Best-effort extraction of the outermost {...} block.
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start : end + 1].strip()

    return text


# -------------------------------------------------------------------
# Public function
# -------------------------------------------------------------------

def send_chat_request(
    messages: List[Dict[str, str]],
    *,
    response_format: Optional[Dict[str, Any]] = None,
    model: Optional[str] = None,
    client: Optional[Any] = None,
) -> str:
    """
    Send a chat conversation to the OpenAI API and return the reply text.

    Parameters
    ----------
    messages : list of {role, content}
        Full conversation, oldest first.
    response_format : dict, optional
        Passed through as `response_format` (e.g. a json_schema definition).
        When set, the returned text is normalized to the bare JSON object.
    model : str, optional
        Override the default model name.
    client : optional
        OpenAI-compatible client; defaults to the shared client.

    Raises
    ------
    AssistantError
        If the API call fails or returns no choices.
    """
    api = client or get_client()
    kwargs: Dict[str, Any] = {
        "model": model or settings.openai_model,
        "messages": messages,
        "temperature": 0.0,
    }
    if response_format is not None:
        kwargs["response_format"] = response_format

    try:
        completion = api.chat.completions.create(**kwargs)
    except OpenAIError as e:
        raise AssistantError(str(e)) from e

    if not completion.choices:
        raise AssistantError("Empty response from OpenAI API.")

    text = completion.choices[0].message.content or ""

    if response_format is None:
        return text
    return _extract_json_from_text(text)
