"""Domain errors raised by services and reported by the CLI.

Each error carries the HTTP-style status code of the outcome it represents.
"""

from typing import Any, List, Optional


class FinBuddyError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 500

    def __init__(self, message: str, details: Optional[List[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(FinBuddyError):
    """Request data failed validation."""

    status_code = 400


class AuthenticationError(FinBuddyError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class NotFoundError(FinBuddyError):
    """The record does not exist or belongs to another user."""

    status_code = 404


class LLMUnavailableError(FinBuddyError):
    """No LLM provider is configured."""

    status_code = 503
