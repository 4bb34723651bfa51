"""
Shared fixtures: fake search, fake assistant backend, translations file.
"""

import json
from typing import Dict, List, Optional

import pytest

from core.assistant.models import AssistantResponse
from core.search.google_search import SearchResult
from runtime.agents.guess_agent import GuessAgent
from runtime.store.translation_store import TranslationStore


TRANSLATIONS = {
    "en": {"yes": "Yes", "no": "No", "done_prompt": "One more?", "goodbye": "Goodbye!", "thanks": "Thanks."},
    "es": {"yes": "Sí", "no": "No", "done_prompt": "¿Otra vez?", "goodbye": "¡Adiós!", "thanks": "Gracias."},
}


class FakeSearch:
    """Records calls and returns canned web / image results."""

    def __init__(self):
        self.calls: List[Dict] = []

    def __call__(self, query, num=10, search_type="web", **kwargs):
        self.calls.append({"query": query, "num": num, "search_type": search_type})
        if search_type == "image":
            return SearchResult(text="", images=["https://img.example/1.jpg", "https://img.example/2.jpg"])
        return SearchResult(text="Result 1:\nTitle: Ada Lovelace\nSnippet: Mathematician\nLink: https://a.example\n\n")


class FakeBackend:
    """AssistantBackend that replays a queue of replies."""

    def __init__(self, replies: Optional[List[Optional[AssistantResponse]]] = None):
        self.replies = list(replies or [])
        self.threads: Dict[str, List[Dict[str, str]]] = {}
        self.runs: List[str] = []

    def create_thread(self, messages):
        thread_id = f"thread_{len(self.threads) + 1}"
        self.threads[thread_id] = list(messages)
        return thread_id

    def add_message(self, thread_id, content):
        self.threads.setdefault(thread_id, []).append({"role": "user", "content": content})

    def run(self, thread_id):
        self.runs.append(thread_id)
        return self.replies.pop(0) if self.replies else None


def question(text="Are you a mathematician?", language="en"):
    return AssistantResponse(type="question", language=language, question=text, response=None)


def identify(text="You are Ada Lovelace.", language="en"):
    return AssistantResponse(type="identify", language=language, question=None, response=text)


@pytest.fixture
def translations_path(tmp_path):
    path = tmp_path / "translations.json"
    path.write_text(json.dumps(TRANSLATIONS, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def translation_store(translations_path):
    return TranslationStore(path=str(translations_path))


@pytest.fixture
def fake_search():
    return FakeSearch()


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def agent(fake_backend, translation_store, fake_search):
    return GuessAgent(
        backend=fake_backend,
        translations=translation_store,
        search=fake_search,
        max_questions=3,
    )
