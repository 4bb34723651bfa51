"""HTTP routes for the GuessWho game.

Exposes endpoints:

- POST /api/start        -> searches the name, returns the first question
- POST /api/answer       -> forwards a yes/no and returns the next move
- POST /api/confirm      -> ends the round after the guess
- GET  /api/exit         -> says goodbye, with localized buttons
- GET  /api/translations -> raw translations.json
- GET  /healthz

Per-user state (thread_id, questions_asked, max_questions, language)
travels in cookies; the handlers themselves are stateless.

Handlers are plain `def` so FastAPI runs them in its threadpool; a
turn blocks while the assistant run is polled.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, HTTPException
from fastapi.responses import JSONResponse, Response

from exceptions.exceptions import (
    GuessWhoError,
    InvalidRequestError,
    MissingThreadError,
    NoAssistantResponseError,
)

from ..agents.guess_agent import GuessAgent
from ..models.api_models import (
    AnswerRequest,
    ConfirmRequest,
    ErrorResponse,
    StartRequest,
    TurnResponse,
)
from ..store.translation_store import DEFAULT_LANGUAGE, TranslationStore


logger = logging.getLogger(__name__)

# Router for all game endpoints
router = APIRouter()


# Module-level references, to be initialized by the server.
_GUESS_AGENT: Optional[GuessAgent] = None
_TRANSLATIONS: Optional[TranslationStore] = None


def init_routes(guess_agent: GuessAgent, translations: TranslationStore) -> None:
    """Initialize module-level references used by the route handlers."""
    global _GUESS_AGENT, _TRANSLATIONS
    _GUESS_AGENT = guess_agent
    _TRANSLATIONS = translations


def _require_guess_agent() -> GuessAgent:
    if _GUESS_AGENT is None:
        raise HTTPException(
            status_code=500,
            detail="GuessAgent is not configured on the server.",
        )
    return _GUESS_AGENT


def _require_translations() -> TranslationStore:
    if _TRANSLATIONS is None:
        raise HTTPException(
            status_code=500,
            detail="TranslationStore is not configured on the server.",
        )
    return _TRANSLATIONS


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


def _turn(turn: TurnResponse) -> JSONResponse:
    return JSONResponse(turn.to_payload())


def _parse_count(value: Optional[str]) -> int:
    try:
        return int(value) if value else 0
    except ValueError:
        return 0


def _start_error_message(exc: Exception) -> str:
    """Best-effort provider message for a failed /api/start.

    SearchError and AssistantError already carry the provider's own
    error message.
    """
    return str(exc) or "Failed to start."


# --------------------------------------------------------
# Endpoint: POST /api/start
# --------------------------------------------------------
@router.post("/api/start")
def start(request: StartRequest):
    """Search for the name, seed a thread and return the first question."""
    agent = _require_guess_agent()
    try:
        turn = agent.start(request.fullname)
    except InvalidRequestError as e:
        logger.warning("[GAME] /api/start rejected: %s", e)
        return _error(str(e), 400)
    except NoAssistantResponseError as e:
        logger.error("[GAME] /api/start got no assistant response on thread %s", e.thread_id)
        return _error(str(e), 500)
    except Exception as e:
        logger.exception("[GAME] Error in /api/start for fullname=%r", request.fullname)
        return _error(_start_error_message(e), 500)

    response = _turn(turn)
    response.set_cookie("thread_id", turn.thread_id)
    response.set_cookie("questions_asked", str(turn.questions_asked))
    response.set_cookie("max_questions", str(turn.max_questions))
    response.set_cookie("language", turn.language)
    return response


# --------------------------------------------------------
# Endpoint: POST /api/answer
# --------------------------------------------------------
@router.post("/api/answer")
def answer(
    request: AnswerRequest,
    thread_id: Optional[str] = Cookie(default=None),
    questions_asked: Optional[str] = Cookie(default=None),
    language: Optional[str] = Cookie(default=None),
):
    """Forward a yes/no answer to the thread and return the next move."""
    agent = _require_guess_agent()
    try:
        turn = agent.answer(
            thread_id=thread_id,
            action=request.action,
            questions_asked=_parse_count(questions_asked),
            language=language,
        )
    except MissingThreadError as e:
        logger.warning("[GAME] /api/answer without thread_id cookie")
        return _error(str(e), 400)
    except InvalidRequestError as e:
        logger.warning("[GAME] /api/answer rejected: %s", e)
        return _error(str(e), 400)
    except NoAssistantResponseError as e:
        logger.error("[GAME] /api/answer got no assistant response on thread %s", thread_id)
        return _error(str(e), 500)
    except Exception:
        logger.exception(
            "[GAME] Error in /api/answer for thread_id=%s action=%r",
            thread_id,
            request.action,
        )
        return _error("Failed to get a response.", 500)

    response = _turn(turn)
    if turn.type == "question":
        response.set_cookie("questions_asked", str(turn.questions_asked))
    response.set_cookie("language", turn.language)
    return response


# --------------------------------------------------------
# Endpoint: POST /api/confirm
# --------------------------------------------------------
@router.post("/api/confirm")
def confirm(request: ConfirmRequest):
    """End the round after the user answered the guess."""
    agent = _require_guess_agent()
    try:
        turn = agent.confirm(request.language)
    except Exception:
        logger.exception("[GAME] Error in /api/confirm")
        return _error("Failed to confirm.", 500)
    return _turn(turn)


# --------------------------------------------------------
# Endpoint: GET /api/exit
# --------------------------------------------------------
@router.get("/api/exit")
def exit_game(language: Optional[str] = Cookie(default=None)):
    """Say goodbye in the language stored in the cookie."""
    agent = _require_guess_agent()
    try:
        turn = agent.exit(language or DEFAULT_LANGUAGE)
    except GuessWhoError:
        logger.exception("[GAME] Error in /api/exit")
        return _error("Failed to exit.", 500)
    return _turn(turn)


# --------------------------------------------------------
# Endpoint: GET /api/translations
# --------------------------------------------------------
@router.get("/api/translations")
def translations():
    """Serve translations.json as stored on disk."""
    store = _require_translations()
    try:
        raw = store.get_raw()
    except GuessWhoError:
        logger.exception("[GAME] Error loading translations.json")
        return _error("Failed to load translations.", 500)
    return Response(content=raw, media_type="application/json")


# --------------------------------------------------------
# Endpoint: GET /healthz
# --------------------------------------------------------
@router.get("/healthz")
def health_check():
    """
    Simple health check endpoint for uptime monitoring.
    """
    return {"status": "ok"}
