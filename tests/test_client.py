"""
Tests for the terminal client state machine
===========================================
"""

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cli.client import GuessClient, ViewState
from cli.main import run_game
from conftest import identify, question
from exceptions.exceptions import ClientError
from runtime.api import game_routes


@pytest.fixture
def app(agent, translation_store):
    app = FastAPI()
    game_routes.init_routes(guess_agent=agent, translations=translation_store)
    app.include_router(game_routes.router)
    yield app
    game_routes.init_routes(guess_agent=None, translations=None)


@pytest.fixture
def guess_client(app):
    return GuessClient(http_client=TestClient(app))


class TestHandleResponse:
    """Mapping of response types to views."""

    def test_question(self, guess_client):
        view = guess_client.handle_response(
            {"type": "question", "language": "en", "question": "Are you left-handed?", "response": None}
        )

        assert view is ViewState.QUESTION
        assert guess_client.question_text == "Are you left-handed?"

    def test_identify(self, guess_client):
        view = guess_client.handle_response(
            {"type": "identify", "language": "en", "question": None, "response": "You are Ada."}
        )

        assert view is ViewState.IDENTIFY
        assert guess_client.identify_text == "You are Ada."

    def test_done_and_exit(self, guess_client):
        assert guess_client.handle_response({"type": "done", "language": "en"}) is ViewState.DONE
        assert guess_client.handle_response({"type": "exit", "language": "en"}) is ViewState.EXIT

    def test_unknown_type_keeps_view(self, guess_client):
        guess_client.handle_response({"type": "question", "language": "en", "question": "?"})

        assert guess_client.handle_response({"type": "thinking", "language": "en"}) is ViewState.QUESTION

    def test_untranslated_language_falls_back_to_english(self, guess_client):
        guess_client.handle_response({"type": "done", "language": "ja"})
        assert guess_client.language == "en"

        guess_client.handle_response({"type": "done", "language": "es"})
        assert guess_client.language == "es"
        assert guess_client.text("done_prompt") == "¿Otra vez?"

    def test_error_envelope_raises(self, guess_client):
        with pytest.raises(ClientError):
            guess_client.handle_response({"error": "Failed to get a response."})


class TestActions:
    """Actions against the real routes with a fake assistant."""

    def test_answers_are_sent_in_current_language(self, guess_client, fake_backend):
        fake_backend.replies = [question(language="es", text="¿Eres matemática?"), identify(language="es")]

        guess_client.start("Ada")
        assert guess_client.view is ViewState.QUESTION
        assert guess_client.questions_asked == 1
        assert len(guess_client.images) == 2

        guess_client.answer_yes()

        assert fake_backend.threads["thread_1"][-1]["content"] == "sí"
        assert guess_client.view is ViewState.IDENTIFY

    def test_confirm_then_quit(self, guess_client, fake_backend):
        fake_backend.replies = [identify()]
        guess_client.start("Ada")

        assert guess_client.confirm_no() is ViewState.DONE
        assert guess_client.quit() is ViewState.EXIT

    def test_play_again_resets(self, guess_client, fake_backend):
        fake_backend.replies = [question()]
        guess_client.start("Ada")

        assert guess_client.play_again() is ViewState.START
        assert guess_client.question_text == ""
        with pytest.raises(ClientError) as excinfo:
            guess_client.answer_no()
        assert str(excinfo.value) == "No thread_id found."
        assert excinfo.value.status_code == 400

    def test_unreachable_server(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        client = GuessClient(http_client=httpx.Client(base_url="http://guesswho.test", transport=httpx.MockTransport(handler)))

        with pytest.raises(ClientError):
            client.start("Ada")


class TestRunGame:

    def test_full_game_in_terminal(self, guess_client, fake_backend):
        fake_backend.replies = [question("Are you a poet?"), identify("You are Ada Lovelace.")]
        replies = iter(["Ada Lovelace", "no", "y", "no"])
        output = []

        run_game(guess_client, read=lambda prompt: next(replies), write=output.append)

        assert guess_client.view is ViewState.EXIT
        assert output[-2:] == ["Goodbye!", "Thanks."]
