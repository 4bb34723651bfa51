"""
HTTP request/response models for the GuessWho runtime API.
"""

from pydantic import BaseModel
from typing import List, Optional


class StartRequest(BaseModel):
    fullname: str = ""


class AnswerRequest(BaseModel):
    action: str


class ConfirmRequest(BaseModel):
    confirm: Optional[str] = None
    language: Optional[str] = None


class TurnResponse(BaseModel):
    """
    Envelope returned by every game endpoint.

    type:
      - "question": show `question` with yes/no buttons
      - "identify": show the guess in `response` with yes/no buttons
      - "done":     ask whether to play again
      - "exit":     say goodbye

    `question` and `response` are always present (possibly null). The
    remaining fields are only set by the endpoints that own them:
    thread_id / max_questions / images by /api/start, questions_asked by
    /api/start and /api/answer, buttons by /api/exit.
    """
    type: str
    language: str = "en"
    question: Optional[str] = None
    response: Optional[str] = None
    thread_id: Optional[str] = None
    questions_asked: Optional[int] = None
    max_questions: Optional[int] = None
    images: Optional[List[str]] = None
    buttons: Optional[List[str]] = None

    def to_payload(self) -> dict:
        """Serialize for the wire, dropping unset optional fields."""
        payload = self.model_dump(exclude_none=True)
        payload.setdefault("question", None)
        payload.setdefault("response", None)
        return payload


class ErrorResponse(BaseModel):
    error: str
