"""
Terminal client for the GuessWho runtime.

GuessClient is a small view-state machine: every server envelope has a
`type` ("question", "identify", "done", "exit") that selects the next
view. The client also tracks the current language so that the yes/no
it sends back is written in the language the assistant is speaking.

Cookies set by the server (thread_id, questions_asked, language, ...)
are kept in the underlying httpx.Client.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from exceptions.exceptions import ClientError


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


class ViewState(str, Enum):
    START = "start"
    QUESTION = "question"
    IDENTIFY = "identify"
    DONE = "done"
    EXIT = "exit"


# Response type -> view. Types not listed here leave the view unchanged.
VIEW_FOR_TYPE = {
    "question": ViewState.QUESTION,
    "identify": ViewState.IDENTIFY,
    "done": ViewState.DONE,
    "exit": ViewState.EXIT,
}


class GuessClient:
    """Client-side state machine + HTTP calls for one player.

    Parameters
    ----------
    base_url:
        Root URL of the GuessWho server.
    http_client:
        Optional pre-built httpx.Client (tests pass one with a mock
        transport). Its base_url is used when given.
    """

    def __init__(self, base_url: str = "http://127.0.0.1:8000", http_client: Optional[httpx.Client] = None) -> None:
        self._http = http_client or httpx.Client(base_url=base_url, timeout=180.0)
        self.view: ViewState = ViewState.START
        self.language: str = DEFAULT_LANGUAGE
        self.question_text: str = ""
        self.identify_text: str = ""
        self.images: List[str] = []
        self.questions_asked: Optional[int] = None
        self.max_questions: Optional[int] = None
        self._translations: Optional[Dict[str, Dict[str, str]]] = None

    # ------------------------------------------------------------------
    # Translations
    # ------------------------------------------------------------------

    @property
    def translations(self) -> Dict[str, Dict[str, str]]:
        if self._translations is None:
            self._translations = self._request("GET", "/api/translations")
        return self._translations

    def text(self, key: str, default: str = "") -> str:
        """Localized UI string for the current language (English fallback)."""
        entry = self.translations.get(self.language) or self.translations.get(DEFAULT_LANGUAGE) or {}
        return entry.get(key) or default

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def handle_response(self, envelope: Dict[str, Any]) -> ViewState:
        """Apply a server envelope and return the resulting view."""
        if "error" in envelope:
            raise ClientError(str(envelope["error"]))

        language = envelope.get("language") or DEFAULT_LANGUAGE
        self.language = language if language in self.translations else DEFAULT_LANGUAGE

        if "images" in envelope:
            self.images = list(envelope.get("images") or [])
        if envelope.get("questions_asked") is not None:
            self.questions_asked = envelope["questions_asked"]
        if envelope.get("max_questions") is not None:
            self.max_questions = envelope["max_questions"]

        response_type = envelope.get("type")
        view = VIEW_FOR_TYPE.get(response_type)
        if view is None:
            logger.warning("Ignoring response with unknown type %r", response_type)
            return self.view

        if view is ViewState.QUESTION:
            self.question_text = envelope.get("question") or ""
        elif view is ViewState.IDENTIFY:
            self.identify_text = envelope.get("response") or ""
        self.view = view
        return self.view

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def start(self, fullname: str) -> ViewState:
        envelope = self._request("POST", "/api/start", json={"fullname": fullname})
        return self.handle_response(envelope)

    def answer_yes(self) -> ViewState:
        return self._answer(self.text("yes", "Yes").lower())

    def answer_no(self) -> ViewState:
        return self._answer(self.text("no", "No").lower())

    def confirm_yes(self) -> ViewState:
        return self._confirm(self.text("yes", "Yes").lower())

    def confirm_no(self) -> ViewState:
        return self._confirm(self.text("no", "No").lower())

    def play_again(self) -> ViewState:
        """Reset to the start view and forget the previous thread."""
        self._http.cookies.clear()
        self.view = ViewState.START
        self.question_text = ""
        self.identify_text = ""
        self.images = []
        self.questions_asked = None
        self.max_questions = None
        return self.view

    def quit(self) -> ViewState:
        envelope = self._request("GET", "/api/exit")
        return self.handle_response(envelope)

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _answer(self, action: str) -> ViewState:
        envelope = self._request("POST", "/api/answer", json={"action": action})
        return self.handle_response(envelope)

    def _confirm(self, confirm: str) -> ViewState:
        envelope = self._request(
            "POST",
            "/api/confirm",
            json={"confirm": confirm, "language": self.language},
        )
        return self.handle_response(envelope)

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ClientError(f"Could not reach the server: {exc}") from exc
        try:
            data = response.json()
        except ValueError:
            raise ClientError(
                f"Unexpected non-JSON response (HTTP {response.status_code}).",
                status_code=response.status_code,
            ) from None
        if response.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ClientError(message or f"HTTP {response.status_code}", status_code=response.status_code)
        return data
