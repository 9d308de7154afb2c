"""Error taxonomy for the flashcards service.

Each error carries the HTTP status it maps to; the API layer renders any of
them as ``{"error": message}``.
"""

from __future__ import annotations

from typing import Optional


class FlashcardsError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(FlashcardsError):
    status_code = 400
    default_message = "Invalid request"


class UserNotFound(FlashcardsError):
    status_code = 400
    default_message = "User not found"


class TransportError(FlashcardsError):
    """The generation service could not be reached."""

    default_message = "AI request failed"


class UpstreamFormatError(FlashcardsError):
    """The generation service answered without a usable result."""

    default_message = "Invalid AI response"


class UnparsableGenerationOutput(FlashcardsError):
    """Generated text stayed invalid JSON after every repair attempt."""

    default_message = "Failed to parse flashcards"

    def __init__(self, raw: str, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw = raw


class StorageError(FlashcardsError):
    default_message = "Database error"


__all__ = [
    "FlashcardsError",
    "InvalidRequest",
    "UserNotFound",
    "TransportError",
    "UpstreamFormatError",
    "UnparsableGenerationOutput",
    "StorageError",
]
