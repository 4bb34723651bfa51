"""
core.api.assistant_client

Thin wrapper around the OpenAI Assistants v2 REST API for GuessWho.

Covers the full thread/run lifecycle used by the guessing game:

    create_thread -> add_message_to_thread -> create_run
        -> wait_for_run_completion -> get_last_assistant_message

Used by:
  - core/assistant/backends.py (AssistantsApiBackend)
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Any, Callable, Dict, List, Optional

import httpx

from configs.settings import settings
from core.assistant.models import RESPONSE_FORMAT
from exceptions.exceptions import (
    AssistantError,
    InvalidRequestError,
    RunFailedError,
    RunTimeoutError,
)


logger = logging.getLogger(__name__)

# Run statuses after which polling cannot succeed any more.
# "requires_action" is included because the assistant has no tools configured.
FAILED_RUN_STATUSES = {"failed", "cancelled", "expired", "incomplete", "requires_action"}

# Thread ids arrive from a client cookie and are embedded in URL paths.
THREAD_ID_PATTERN = re.compile(r"^thread_[A-Za-z0-9]+$")


def _checked_thread_id(thread_id: str) -> str:
    if not isinstance(thread_id, str) or not THREAD_ID_PATTERN.match(thread_id):
        raise InvalidRequestError(f"Invalid thread_id: {thread_id!r}")
    return thread_id


class AssistantClient:
    """Synchronous client for threads, messages, runs and run steps.

    Parameters
    ----------
    api_key:
        OpenAI API key. Defaults to settings.openai_api_key.
    assistant_id:
        Assistant used by create_run when none is passed explicitly.
    base_url:
        API root, e.g. "https://api.openai.com/v1".
    poll_interval, timeout:
        Seconds between run status checks, and the total budget for a run.
    http_client:
        Optional pre-built httpx.Client (tests use a mock transport).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        assistant_id: Optional[str] = None,
        base_url: Optional[str] = None,
        poll_interval: Optional[float] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._api_key = api_key
        self._assistant_id = assistant_id
        self.base_url = (base_url or settings.openai_base_url).rstrip("/")
        self.poll_interval = settings.run_poll_interval if poll_interval is None else poll_interval
        self.timeout = settings.run_timeout if timeout is None else timeout
        self._http = http_client or httpx.Client(timeout=60.0)
        self._sleep = sleep
        self._clock = clock

    # ------------------------------------------------------------------
    # Threads and messages
    # ------------------------------------------------------------------

    def create_thread(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        """Create a thread seeded with the given {role, content} messages."""
        return self._post("/threads", {"messages": messages})

    def add_message_to_thread(self, thread_id: str, role: str, content: str) -> Dict[str, Any]:
        return self._post(f"/threads/{_checked_thread_id(thread_id)}/messages", {"role": role, "content": content})

    def retrieve_message(self, thread_id: str, message_id: str) -> Dict[str, Any]:
        return self._get(f"/threads/{_checked_thread_id(thread_id)}/messages/{message_id}")

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def create_run(self, thread_id: str, assistant_id: Optional[str] = None) -> Dict[str, Any]:
        """Start a run constrained to the AssistantResponse JSON schema."""
        payload = {
            "assistant_id": assistant_id or self._assistant_id or settings.assistant_id,
            "response_format": RESPONSE_FORMAT,
        }
        return self._post(f"/threads/{_checked_thread_id(thread_id)}/runs", payload)

    def retrieve_run(self, thread_id: str, run_id: str) -> Dict[str, Any]:
        return self._get(f"/threads/{_checked_thread_id(thread_id)}/runs/{run_id}")

    def list_run_steps(self, thread_id: str, run_id: str) -> Dict[str, Any]:
        return self._get(f"/threads/{_checked_thread_id(thread_id)}/runs/{run_id}/steps")

    def wait_for_run_completion(self, thread_id: str, run_id: str, timeout: Optional[float] = None) -> bool:
        """Poll the run until it is completed.

        Returns True on `completed`. Raises RunFailedError as soon as the run
        reaches a failed terminal status, and RunTimeoutError once `timeout`
        seconds have elapsed without completion.
        """
        budget = self.timeout if timeout is None else timeout
        start = self._clock()
        while True:
            run_data = self.retrieve_run(thread_id, run_id)
            status = run_data.get("status")
            if status == "completed":
                return True
            if status in FAILED_RUN_STATUSES:
                last_error = run_data.get("last_error") or {}
                raise RunFailedError(thread_id, run_id, status, last_error.get("message"))
            if self._clock() - start > budget:
                logger.warning(
                    "[ASSISTANT] run %s on thread %s still '%s' after %.1fs",
                    run_id,
                    thread_id,
                    status,
                    budget,
                )
                raise RunTimeoutError(thread_id, run_id, budget)
            self._sleep(self.poll_interval)

    def get_last_assistant_message(self, thread_id: str, run_id: str) -> Optional[Dict[str, Any]]:
        """Return the JSON object written by the assistant during the run.

        Run steps are walked newest first; the first message_creation step
        whose message was written by the assistant is decoded. Returns None
        when there is no such message or its text is not valid JSON.
        """
        steps_data = self.list_run_steps(thread_id, run_id)
        steps = steps_data.get("data") or []
        for step in reversed(steps):
            if step.get("type") != "message_creation":
                continue
            msg_id = step["step_details"]["message_creation"]["message_id"]
            msg_data = self.retrieve_message(thread_id, msg_id)
            if msg_data.get("role") != "assistant":
                continue

            json_str = ""
            for part in msg_data.get("content") or []:
                if part.get("type") == "text":
                    json_str += (part.get("text") or {}).get("value") or ""
            try:
                return json.loads(json_str)
            except json.JSONDecodeError:
                logger.warning(
                    "[ASSISTANT] message %s on thread %s is not valid JSON: %r",
                    msg_id,
                    thread_id,
                    json_str[:200],
                )
                return None
        return None

    def run_assistant(self, thread_id: str, assistant_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Create a run, wait for it, and return the assistant's JSON message."""
        run_obj = self.create_run(thread_id, assistant_id)
        run_id = run_obj["id"]
        logger.info("[ASSISTANT] started run %s on thread %s", run_id, thread_id)
        self.wait_for_run_completion(thread_id, run_id)
        return self.get_last_assistant_message(thread_id, run_id)

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key or settings.openai_api_key}",
            "OpenAI-Beta": "assistants=v2",
        }

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._http.post(self.base_url + path, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            raise AssistantError(f"Request to {path} failed: {exc}") from exc
        return self._decode(response)

    def _get(self, path: str) -> Dict[str, Any]:
        try:
            response = self._http.get(self.base_url + path, headers=self._headers())
        except httpx.HTTPError as exc:
            raise AssistantError(f"Request to {path} failed: {exc}") from exc
        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> Dict[str, Any]:
        if response.is_error:
            message = response.text
            try:
                data = response.json()
            except ValueError:
                data = None
            if isinstance(data, dict) and isinstance(data.get("error"), dict):
                message = data["error"].get("message") or json.dumps(data)
            elif data is not None:
                message = json.dumps(data)
            raise AssistantError(message, status_code=response.status_code)
        return response.json()
