"""
Custom exceptions for GuessWho.

These exceptions are intentionally simple and descriptive.
They are used across:

  - core/search/
  - core/api/
  - core/assistant/
  - runtime/

Placing them at the project root (exceptions/) avoids circular imports
and keeps exception types consistent across modules.
"""

from typing import Optional


class GuessWhoError(Exception):
    """Base class for every error raised by GuessWho itself."""


class ConfigurationError(GuessWhoError):
    """
    Raised when a required setting (API key, assistant id, ...) is missing
    or has an invalid value.
    """


class SearchError(GuessWhoError):
    """
    Raised when the Google Custom Search request fails.

    `status_code` is the HTTP status returned by the provider, if any.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AssistantError(GuessWhoError):
    """
    Raised when the assistant provider (Assistants or Chat Completions API)
    returns an error or an unusable payload.

    The message is the provider's own error message when one could be
    extracted, otherwise the raw response body.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RunTimeoutError(AssistantError):
    """Raised when a run does not reach `completed` within the timeout."""

    def __init__(self, thread_id: str, run_id: str, timeout: float):
        self.thread_id = thread_id
        self.run_id = run_id
        self.timeout = timeout
        super().__init__("Run did not complete in time.")


class RunFailedError(AssistantError):
    """
    Raised when a run ends in a terminal state other than `completed`
    (failed, cancelled, expired, incomplete) or asks for tool output.
    """

    def __init__(self, thread_id: str, run_id: str, status: str, details: Optional[str] = None):
        self.thread_id = thread_id
        self.run_id = run_id
        self.status = status
        msg = f"Run {run_id} ended with status '{status}'."
        if details:
            msg += f" Details: {details}"
        super().__init__(msg)


class NoAssistantResponseError(GuessWhoError):
    """Raised when a run completed but produced no parseable assistant message."""

    def __init__(self, thread_id: Optional[str] = None):
        self.thread_id = thread_id
        super().__init__("No assistant response.")


class MissingThreadError(GuessWhoError):
    """Raised when an answer arrives without a thread_id cookie."""

    def __init__(self):
        super().__init__("No thread_id found.")


class InvalidRequestError(GuessWhoError):
    """Raised when a request body is syntactically valid but unusable."""


class TranslationsUnavailableError(GuessWhoError):
    """Raised when translations.json is missing or cannot be parsed."""

    def __init__(self, path, details=None):
        self.path = path
        self.details = details or "Unknown error."
        msg = f"Failed to load translations from {path}\nDetails: {self.details}"
        super().__init__(msg)


class ClientError(GuessWhoError):
    """Raised by the terminal client when the server answers with an error envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
