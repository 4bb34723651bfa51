"""GuessAgent implementation.

Responsible for one game turn at a time:
- start: search the user's name, seed a thread with the results, and
  get the first yes/no question
- answer: forward the user's yes/no to the thread and get the next
  question (or the final guess)
- confirm / exit: close the game in the user's language

The agent keeps no per-user state of its own. The thread id, question
counter and language are passed in by the caller (the HTTP layer keeps
them in cookies) and handed back inside every TurnResponse.
"""

import logging
from typing import Callable, Optional

from core.assistant.backends import AssistantBackend
from core.assistant.prompts import (
    PROMPT_BACKGROUND,
    PROMPT_FINAL_GUESS,
    PROMPT_FIRST_QUESTION,
)
from core.search.google_search import SearchResult, google_search
from exceptions.exceptions import (
    InvalidRequestError,
    MissingThreadError,
    NoAssistantResponseError,
)

from ..models.api_models import TurnResponse
from ..store.translation_store import DEFAULT_LANGUAGE, TranslationStore


logger = logging.getLogger(__name__)


class GuessAgent:
    """Turn-taking logic for the guessing game.

    Parameters
    ----------
    backend:
        AssistantBackend used for threads and runs.
    translations:
        TranslationStore used for localized exit buttons.
    search:
        Callable with google_search's signature; replaced in tests.
    max_questions:
        Number of questions after which the assistant is asked to guess.
    search_results:
        Number of web and image results requested per search.
    """

    def __init__(
        self,
        backend: AssistantBackend,
        translations: TranslationStore,
        search: Callable[..., SearchResult] = google_search,
        max_questions: int = 10,
        search_results: int = 10,
    ) -> None:
        self.backend = backend
        self.translations = translations
        self.search = search
        self.max_questions = max_questions
        self.search_results = search_results

    def start(self, fullname: str) -> TurnResponse:
        """Begin a new game for `fullname` and return the first question.

        Flow:
        - web search (text fed to the assistant)
        - image search (links returned to the client)
        - create a thread with the background and the opening request
        - run the assistant
        """
        fullname = (fullname or "").strip()
        if not fullname:
            raise InvalidRequestError("fullname is required.")

        web = self.search(fullname, num=self.search_results, search_type="web")
        images = self.search(fullname, num=self.search_results, search_type="image")

        thread_id = self.backend.create_thread(
            [
                {"role": "user", "content": PROMPT_BACKGROUND.format(background=web.text)},
                {"role": "user", "content": PROMPT_FIRST_QUESTION.format(fullname=fullname)},
            ]
        )
        logger.info("[GAME] started thread %s for %r", thread_id, fullname)

        reply = self.backend.run(thread_id)
        if reply is None:
            raise NoAssistantResponseError(thread_id)

        return TurnResponse(
            type=reply.type,
            language=reply.language or DEFAULT_LANGUAGE,
            question=reply.question,
            response=reply.response,
            thread_id=thread_id,
            questions_asked=1,
            max_questions=self.max_questions,
            images=images.images,
        )

    def answer(
        self,
        thread_id: Optional[str],
        action: str,
        questions_asked: int = 0,
        language: Optional[str] = None,
    ) -> TurnResponse:
        """Forward the user's answer and return the assistant's next move.

        `questions_asked` is the count before this turn; it is incremented
        only when the assistant replies with another question. Once the
        limit has been reached the assistant is told to make its guess.
        """
        if not thread_id:
            raise MissingThreadError()

        content = action
        if questions_asked >= self.max_questions:
            content = f"{action}\n\n" + PROMPT_FINAL_GUESS.format(max_questions=self.max_questions)
        self.backend.add_message(thread_id, content)

        reply = self.backend.run(thread_id)
        if reply is None:
            raise NoAssistantResponseError(thread_id)

        if reply.type == "question":
            questions_asked += 1

        logger.info(
            "[GAME] thread %s: answer=%r -> %s (%d/%d)",
            thread_id,
            action,
            reply.type,
            questions_asked,
            self.max_questions,
        )

        return TurnResponse(
            type=reply.type,
            language=reply.language or language or DEFAULT_LANGUAGE,
            question=reply.question,
            response=reply.response,
            questions_asked=questions_asked,
        )

    def confirm(self, language: Optional[str] = None) -> TurnResponse:
        """The user confirmed or rejected the guess; the game is over either way."""
        return TurnResponse(type="done", language=language or DEFAULT_LANGUAGE)

    def exit(self, language: Optional[str] = None) -> TurnResponse:
        """The user does not want another round."""
        language = language or DEFAULT_LANGUAGE
        return TurnResponse(
            type="exit",
            language=language,
            buttons=self.translations.buttons(language),
        )
