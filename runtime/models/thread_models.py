"""
Thread-related models for the GuessWho runtime.

These describe the conversation history kept server-side by the
Chat Completions backend:
- a minimal Thread object
- ThreadMessage entries (system / user / assistant)
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, Field


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class ThreadMessage(BaseModel):
    role: str          # "system", "user" or "assistant"
    content: str       # raw text (JSON text for assistant messages)
    timestamp: Optional[str] = None  # ISO string


class Thread(BaseModel):
    thread_id: str
    messages: List[ThreadMessage] = Field(default_factory=list)
    created_at: str = Field(default_factory=_utcnow)

    def as_chat_messages(self) -> List[dict]:
        """Return the history in the {role, content} shape the chat API expects."""
        return [{"role": m.role, "content": m.content} for m in self.messages]
