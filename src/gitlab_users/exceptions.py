"""Custom exception hierarchy for gitlab-users.

All exceptions that cross layer boundaries must inherit from
:class:`GitlabUsersError`.  Raw third-party exceptions (``requests``,
``json``) must NEVER propagate beyond the infrastructure layer — they
are caught and re-raised as a typed subclass defined here.

Hierarchy
---------
GitlabUsersError
├── ApiConnectionError
├── ResponseDecodeError
│   └── PaginationError
├── ValidationError
│   ├── InvalidUsernameError
│   └── InvalidEmailError
├── PromptCancelledError
└── MissingDependencyError
"""

from __future__ import annotations


class GitlabUsersError(Exception):
    """Base exception for all gitlab-users errors.

    Every fatal condition maps to a subclass of this exception so that
    the CLI error boundary can render a clean message and choose the
    exit code in one place.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Transport -------------------------------------------------------------

class ApiConnectionError(GitlabUsersError):
    """Raised when an HTTP request cannot be completed (DNS, connect, TLS)."""


# --- Decoding --------------------------------------------------------------

class ResponseDecodeError(GitlabUsersError):
    """Raised when a response body cannot be decoded into domain models."""


class PaginationError(ResponseDecodeError):
    """Raised when the pagination headers are missing or not integers."""


# --- Input validation ------------------------------------------------------

class ValidationError(GitlabUsersError):
    """Raised when interactive input is rejected before any network call."""


class InvalidUsernameError(ValidationError):
    """Raised when a login handle contains anything but ASCII letters."""


class InvalidEmailError(ValidationError):
    """Raised when an email address is too long or malformed."""


# --- Interaction / environment ----------------------------------------------

class PromptCancelledError(GitlabUsersError):
    """Raised when the user dismisses an interactive prompt."""


class MissingDependencyError(GitlabUsersError):
    """Raised when a UI dependency (rich, questionary) cannot be imported."""
