"""Failure kinds of the conversation pipeline.

Every data-path error is non-fatal: ``ChatSession.send`` catches it and
appends a single bot turn carrying ``user_message``.
"""

from __future__ import annotations

from typing import Any, Optional


class ChatError(Exception):
    """Base class for conversation pipeline failures."""

    user_message = "Sorry, something went wrong. Please try again."


class EmptyInput(ChatError):
    """Raised when a submission is empty after trimming whitespace."""

    def __init__(self) -> None:
        super().__init__("Utterance is empty after trimming whitespace.")


class TransportError(ChatError):
    """The HTTP call failed: connection error, non-2xx status or unreadable body."""

    user_message = "An error occurred while connecting to the chatbot. Please try again."

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        self.detail = detail
        self.status_code = status_code
        msg = f"Gemini API call failed: {detail}"
        if status_code is not None:
            msg += f" (status {status_code})"
        super().__init__(msg)


class MalformedEnvelope(ChatError):
    """The response lacks the candidates/content/parts/text structure."""

    user_message = "Sorry, I couldn't get a response. Please try again."

    def __init__(self, envelope: Any, reason: str) -> None:
        self.envelope = envelope
        self.reason = reason
        super().__init__(f"Unexpected API response structure: {reason}")


class InvalidJSON(ChatError):
    """The model text could not be parsed as JSON."""

    user_message = "Sorry, I received an unreadable response. Please try again."

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Error parsing JSON response: {reason}")


class SchemaMismatch(ChatError):
    """The parsed JSON does not carry a non-empty 'points' array of strings."""

    user_message = "Sorry, I couldn't format the response. Please try again."

    def __init__(self, payload: Any, reason: str) -> None:
        self.payload = payload
        self.reason = reason
        super().__init__(f"API response did not contain a 'points' array: {reason}")


class UnexpectedFailure(ChatError):
    """Any other exception raised while a request was in flight."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"Unexpected {type(cause).__name__}: {cause}")
