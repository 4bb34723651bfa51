from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from exceptions.exceptions import ConfigurationError


load_dotenv()


PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_TRANSLATIONS_PATH = PROJECT_ROOT / "runtime" / "static" / "translations.json"

SUPPORTED_BACKENDS = ("assistants", "chat")


class Settings:
    """
    Central configuration for GuessWho.

    Values are loaded once from environment variables (with sensible defaults)
    and then exposed via typed properties. Secrets are only checked when they
    are actually used, so the server can start (and tests can run) without
    every credential being present.
    """

    def __init__(self) -> None:
        # OpenAI / assistant configuration
        self._openai_api_key = os.getenv("OPENAI_API_KEY")
        self._openai_base_url = os.getenv("OPENAI_BASE_URL") or "https://api.openai.com/v1"
        self._openai_model = os.getenv("GUESSWHO_OPENAI_MODEL", "gpt-4.1-mini")
        self._assistant_id = os.getenv("ASSISTANT_ID")
        self._backend = os.getenv("GUESSWHO_BACKEND", "assistants").strip().lower()

        # Google Custom Search
        self._google_api_key = os.getenv("GOOGLE_API_KEY")
        self._google_cse_id = os.getenv("GOOGLE_CSE_ID")
        self._search_results = int(os.getenv("GUESSWHO_SEARCH_RESULTS", "10"))

        # Game / polling limits
        self._max_questions = int(os.getenv("GUESSWHO_MAX_QUESTIONS", "10"))
        self._run_poll_interval = float(os.getenv("GUESSWHO_RUN_POLL_INTERVAL", "0.5"))
        self._run_timeout = float(os.getenv("GUESSWHO_RUN_TIMEOUT", "120"))

        # Files and logging
        self._translations_path = Path(
            os.getenv("GUESSWHO_TRANSLATIONS_PATH", str(DEFAULT_TRANSLATIONS_PATH))
        )
        runtime_data_dir = os.getenv("GUESSWHO_RUNTIME_DATA_DIR")
        self._runtime_data_dir = Path(runtime_data_dir) if runtime_data_dir else None
        self._log_level = os.getenv("GUESSWHO_LOG_LEVEL", "INFO").upper()

        # Terminal client
        self._server_url = os.getenv("GUESSWHO_SERVER_URL", "http://127.0.0.1:8000")

    # ------------------------------------------------------------------
    # OpenAI / assistant settings
    # ------------------------------------------------------------------

    @property
    def openai_api_key(self) -> str:
        if not self._openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set. Please export it in your environment "
                "or define it in a .env file."
            )
        return self._openai_api_key

    @property
    def openai_base_url(self) -> str:
        return self._openai_base_url.rstrip("/")

    @property
    def openai_model(self) -> str:
        return self._openai_model

    @property
    def assistant_id(self) -> str:
        if not self._assistant_id:
            raise ConfigurationError(
                "ASSISTANT_ID is not set. It is required by the 'assistants' backend."
            )
        return self._assistant_id

    @property
    def backend(self) -> str:
        if self._backend not in SUPPORTED_BACKENDS:
            raise ConfigurationError(
                f"Unknown GUESSWHO_BACKEND={self._backend!r}; "
                f"expected one of {', '.join(SUPPORTED_BACKENDS)}."
            )
        return self._backend

    # ------------------------------------------------------------------
    # Search settings
    # ------------------------------------------------------------------

    @property
    def google_api_key(self) -> str:
        if not self._google_api_key:
            raise ConfigurationError("GOOGLE_API_KEY is not set.")
        return self._google_api_key

    @property
    def google_cse_id(self) -> str:
        if not self._google_cse_id:
            raise ConfigurationError("GOOGLE_CSE_ID is not set.")
        return self._google_cse_id

    @property
    def search_results(self) -> int:
        return self._search_results

    # ------------------------------------------------------------------
    # Limits
    # ------------------------------------------------------------------

    @property
    def max_questions(self) -> int:
        return self._max_questions

    @property
    def run_poll_interval(self) -> float:
        return self._run_poll_interval

    @property
    def run_timeout(self) -> float:
        return self._run_timeout

    # ------------------------------------------------------------------
    # Paths, logging, client
    # ------------------------------------------------------------------

    @property
    def translations_path(self) -> Path:
        return self._translations_path

    @property
    def runtime_data_dir(self) -> Optional[Path]:
        return self._runtime_data_dir

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def server_url(self) -> str:
        return self._server_url.rstrip("/")


settings = Settings()
