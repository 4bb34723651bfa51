"""
Tests for Settings
==================
"""

import pytest

from configs.settings import Settings
from exceptions.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "OPENAI_BASE_URL",
        "ASSISTANT_ID",
        "GOOGLE_API_KEY",
        "GOOGLE_CSE_ID",
        "GUESSWHO_BACKEND",
        "GUESSWHO_MAX_QUESTIONS",
        "GUESSWHO_RUN_POLL_INTERVAL",
        "GUESSWHO_RUN_TIMEOUT",
        "GUESSWHO_RUNTIME_DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:

    def test_defaults(self, clean_env):
        s = Settings()

        assert s.backend == "assistants"
        assert s.max_questions == 10
        assert s.run_poll_interval == 0.5
        assert s.run_timeout == 120
        assert s.openai_base_url == "https://api.openai.com/v1"
        assert s.runtime_data_dir is None
        assert s.translations_path.name == "translations.json"

    def test_missing_secrets_raise_on_access(self, clean_env):
        s = Settings()

        with pytest.raises(ConfigurationError):
            s.openai_api_key
        with pytest.raises(ConfigurationError):
            s.assistant_id
        with pytest.raises(ConfigurationError):
            s.google_api_key

    def test_overrides(self, clean_env):
        clean_env.setenv("GUESSWHO_BACKEND", "Chat")
        clean_env.setenv("GUESSWHO_MAX_QUESTIONS", "5")
        clean_env.setenv("OPENAI_BASE_URL", "http://localhost:9000/v1/")

        s = Settings()

        assert s.backend == "chat"
        assert s.max_questions == 5
        assert s.openai_base_url == "http://localhost:9000/v1"

    def test_unknown_backend(self, clean_env):
        clean_env.setenv("GUESSWHO_BACKEND", "carrier-pigeon")

        with pytest.raises(ConfigurationError):
            Settings().backend
