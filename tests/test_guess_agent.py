"""
Tests for GuessAgent turn-taking
================================
"""

import pytest

from conftest import identify, question
from core.assistant.models import AssistantResponse
from exceptions.exceptions import InvalidRequestError, MissingThreadError, NoAssistantResponseError


class TestStart:

    def test_searches_web_and_images(self, agent, fake_backend, fake_search):
        fake_backend.replies = [question()]

        agent.start("  Ada Lovelace  ")

        assert [c["search_type"] for c in fake_search.calls] == ["web", "image"]
        assert all(c["query"] == "Ada Lovelace" for c in fake_search.calls)
        assert all(c["num"] == 10 for c in fake_search.calls)

    def test_seeds_thread_with_background_and_opening(self, agent, fake_backend):
        fake_backend.replies = [question()]

        turn = agent.start("Ada Lovelace")

        messages = fake_backend.threads[turn.thread_id]
        assert messages[0]["content"].startswith("Below are some background details:\nResult 1:")
        assert messages[1]["content"] == (
            "Please start by asking a yes/no question to identify which one of these "
            "matches me. My name: Ada Lovelace"
        )
        assert all(m["role"] == "user" for m in messages)

    def test_returns_first_question_with_counters_and_images(self, agent, fake_backend):
        fake_backend.replies = [question(language="es", text="¿Eres matemática?")]

        turn = agent.start("Ada Lovelace")

        assert turn.type == "question"
        assert turn.question == "¿Eres matemática?"
        assert turn.language == "es"
        assert turn.thread_id == "thread_1"
        assert turn.questions_asked == 1
        assert turn.max_questions == 3
        assert turn.images == ["https://img.example/1.jpg", "https://img.example/2.jpg"]

    def test_empty_language_falls_back_to_english(self, agent, fake_backend):
        fake_backend.replies = [question(language="")]

        assert agent.start("Ada").language == "en"

    def test_blank_name_is_rejected(self, agent, fake_search):
        with pytest.raises(InvalidRequestError):
            agent.start("   ")
        assert fake_search.calls == []

    def test_no_assistant_reply(self, agent, fake_backend):
        fake_backend.replies = [None]

        with pytest.raises(NoAssistantResponseError):
            agent.start("Ada")


class TestAnswer:

    def test_question_increments_counter(self, agent, fake_backend):
        fake_backend.replies = [question("Do you live in London?")]

        turn = agent.answer("thread_1", "yes", questions_asked=1, language="en")

        assert fake_backend.threads["thread_1"] == [{"role": "user", "content": "yes"}]
        assert turn.type == "question"
        assert turn.question == "Do you live in London?"
        assert turn.questions_asked == 2

    def test_identify_keeps_counter(self, agent, fake_backend):
        fake_backend.replies = [identify()]

        turn = agent.answer("thread_1", "no", questions_asked=2)

        assert turn.type == "identify"
        assert turn.response == "You are Ada Lovelace."
        assert turn.questions_asked == 2

    def test_language_prefers_assistant_then_previous(self, agent, fake_backend):
        fake_backend.replies = [
            question(language="fr"),
            AssistantResponse(type="question", language="", question="?", response=None),
        ]

        assert agent.answer("thread_1", "oui", language="es").language == "fr"
        assert agent.answer("thread_1", "oui", language="es").language == "es"

    def test_limit_reached_asks_for_guess(self, agent, fake_backend):
        fake_backend.replies = [identify()]

        agent.answer("thread_1", "yes", questions_asked=3)

        content = fake_backend.threads["thread_1"][0]["content"]
        assert content.startswith("yes\n\n")
        assert "identify" in content
        assert "3 questions" in content

    def test_missing_thread(self, agent):
        with pytest.raises(MissingThreadError) as excinfo:
            agent.answer(None, "yes")
        assert str(excinfo.value) == "No thread_id found."

    def test_no_assistant_reply(self, agent, fake_backend):
        fake_backend.replies = [None]

        with pytest.raises(NoAssistantResponseError):
            agent.answer("thread_1", "yes")


class TestEndOfRound:

    def test_confirm_returns_done(self, agent):
        turn = agent.confirm("es")

        assert turn.to_payload() == {"type": "done", "language": "es", "question": None, "response": None}

    def test_confirm_defaults_to_english(self, agent):
        assert agent.confirm(None).language == "en"

    def test_exit_has_localized_buttons(self, agent):
        turn = agent.exit("es")

        assert turn.type == "exit"
        assert turn.buttons == ["Sí", "No"]

    def test_exit_unknown_language_uses_defaults(self, agent):
        assert agent.exit("xx").buttons == ["Yes", "No"]
