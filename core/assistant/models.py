from typing import Literal, Optional

from pydantic import BaseModel


ResponseType = Literal["question", "identify", "done", "exit"]


class AssistantResponse(BaseModel):
    """
    Structured message the assistant produces on every run.

      - type: what the client should show next
      - language: two-letter code of the language the user is writing in
      - question: the yes/no question when type == "question"
      - response: the guess when type == "identify"
    """
    type: ResponseType
    language: str
    question: Optional[str]
    response: Optional[str]


# JSON schema sent as `response_format` so both the Assistants and the
# Chat Completions API are held to the AssistantResponse shape.
RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "assistant_response",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "type": {"type": "string", "enum": ["question", "identify", "done", "exit"]},
                "language": {"type": "string"},
                "question": {"type": ["string", "null"]},
                "response": {"type": ["string", "null"]},
            },
            "required": ["type", "language", "question", "response"],
            "additionalProperties": False,
        },
    },
}
