"""
FastAPI application entry point for the GuessWho runtime.

Responsibilities:
- configure logging
- construct shared singletons (TranslationStore, assistant backend, GuessAgent)
- include the game routes

Run with:

    uvicorn runtime.api.server:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from configs.settings import settings
from core.api.assistant_client import AssistantClient
from core.assistant.backends import (
    AssistantBackend,
    AssistantsApiBackend,
    ChatCompletionsBackend,
)
from runtime.agents.guess_agent import GuessAgent
from runtime.store.thread_store import ThreadStore
from runtime.store.translation_store import TranslationStore
from . import game_routes


logging.basicConfig(
    level=settings.log_level,
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_backend() -> AssistantBackend:
    """Pick the assistant backend named by GUESSWHO_BACKEND."""
    if settings.backend == "chat":
        data_dir = settings.runtime_data_dir
        thread_store = ThreadStore(data_dir=str(data_dir) if data_dir else None)
        return ChatCompletionsBackend(thread_store=thread_store, model=settings.openai_model)

    # Credentials are read lazily per request, so the server can start
    # without them and fail the first turn with a clear error instead.
    return AssistantsApiBackend(AssistantClient())


# ---------------------------------------------------------------------------
# Shared singletons
# ---------------------------------------------------------------------------

# translations.json, served as-is and used for the exit buttons.
translation_store = TranslationStore(path=str(settings.translations_path))

backend = build_backend()
logger.info("[SERVER] using '%s' assistant backend", settings.backend)

guess_agent = GuessAgent(
    backend=backend,
    translations=translation_store,
    max_questions=settings.max_questions,
    search_results=settings.search_results,
)

# ---------------------------------------------------------------------------
# FastAPI app + route registration
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    backend.close()
    logger.info("[SERVER] assistant backend closed")


app = FastAPI(title="GuessWho Runtime", lifespan=lifespan)

# Initialize the router module with our shared objects, then include it.
game_routes.init_routes(
    guess_agent=guess_agent,
    translations=translation_store,
)
app.include_router(game_routes.router)
