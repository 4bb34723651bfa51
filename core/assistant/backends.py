"""
Assistant backends for the guessing conversation.

GuessAgent only needs three operations on "some assistant":

    thread_id = backend.create_thread(messages)
    backend.add_message(thread_id, content)
    response = backend.run(thread_id)   # AssistantResponse or None

Two implementations are provided:

- AssistantsApiBackend: OpenAI Assistants v2 (threads and runs live at OpenAI).
- ChatCompletionsBackend: OpenAI Chat Completions, with the thread history
  kept locally in a ThreadStore-like object.

Both constrain the model output to the AssistantResponse JSON schema.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Protocol

from pydantic import ValidationError

from core.api import openai_client
from core.api.assistant_client import AssistantClient
from core.assistant.models import RESPONSE_FORMAT, AssistantResponse
from core.assistant.prompts import PROMPT_SYSTEM_INSTRUCTIONS
from exceptions.exceptions import AssistantError


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Backend interface
# ---------------------------------------------------------------------------


class AssistantBackend(Protocol):
    """Abstract interface for the conversational assistant."""

    def create_thread(self, messages: List[Dict[str, str]]) -> str:
        """Create a thread seeded with {role, content} messages; return its id."""
        ...

    def add_message(self, thread_id: str, content: str) -> None:
        """Append a user message to the thread."""
        ...

    def run(self, thread_id: str) -> Optional[AssistantResponse]:
        """Run the assistant on the thread and return its structured reply.

        Returns None when the assistant produced nothing usable.
        """
        ...

    def close(self) -> None:
        """Release network resources held by the backend."""
        ...


def parse_assistant_response(data: Any) -> Optional[AssistantResponse]:
    """Validate a decoded assistant message; None if it has the wrong shape."""
    if not isinstance(data, dict):
        return None
    try:
        return AssistantResponse(**data)
    except ValidationError as exc:
        logger.warning("[ASSISTANT] reply does not match schema: %s", exc)
        return None


# ---------------------------------------------------------------------------
# Assistants API
# ---------------------------------------------------------------------------


class AssistantsApiBackend:
    """AssistantBackend backed by the OpenAI Assistants v2 REST API."""

    def __init__(self, client: AssistantClient, assistant_id: Optional[str] = None) -> None:
        self.client = client
        self.assistant_id = assistant_id

    def create_thread(self, messages: List[Dict[str, str]]) -> str:
        thread = self.client.create_thread(messages)
        return thread["id"]

    def add_message(self, thread_id: str, content: str) -> None:
        self.client.add_message_to_thread(thread_id, "user", content)

    def run(self, thread_id: str) -> Optional[AssistantResponse]:
        data = self.client.run_assistant(thread_id, self.assistant_id)
        return parse_assistant_response(data)

    def close(self) -> None:
        self.client.close()


# ---------------------------------------------------------------------------
# Chat Completions API
# ---------------------------------------------------------------------------


class ChatCompletionsBackend:
    """AssistantBackend backed by the Chat Completions API.

    Parameters
    ----------
    thread_store:
        Object exposing create_thread(messages), get_thread(thread_id) and
        append_message(thread_id, role, content); see runtime.store.ThreadStore.
    model:
        Chat model name; defaults to settings.openai_model.
    instructions:
        System prompt prepended to every request (not stored in the thread).
    client:
        Optional OpenAI-compatible client passed to openai_client.
    """

    def __init__(
        self,
        thread_store,
        model: Optional[str] = None,
        instructions: str = PROMPT_SYSTEM_INSTRUCTIONS,
        client: Optional[Any] = None,
    ) -> None:
        self.thread_store = thread_store
        self.model = model
        self.instructions = instructions.strip()
        self.client = client

    def create_thread(self, messages: List[Dict[str, str]]) -> str:
        return self.thread_store.create_thread(messages).thread_id

    def add_message(self, thread_id: str, content: str) -> None:
        try:
            self.thread_store.append_message(thread_id, "user", content)
        except KeyError:
            raise AssistantError(f"No thread found with id '{thread_id}'.", status_code=404) from None

    def run(self, thread_id: str) -> Optional[AssistantResponse]:
        thread = self.thread_store.get_thread(thread_id)
        if thread is None:
            raise AssistantError(f"No thread found with id '{thread_id}'.", status_code=404)

        messages = [{"role": "system", "content": self.instructions}]
        messages.extend(thread.as_chat_messages())

        text = openai_client.send_chat_request(
            messages,
            response_format=RESPONSE_FORMAT,
            model=self.model,
            client=self.client,
        )
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("[ASSISTANT] chat reply on %s is not valid JSON: %r", thread_id, text[:200])
            return None

        response = parse_assistant_response(data)
        if response is not None:
            # Keep the reply in the history so the next turn sees it.
            self.thread_store.append_message(thread_id, "assistant", text)
        return response

    def close(self) -> None:
        # The shared OpenAI client lives in openai_client for the whole process.
        pass
