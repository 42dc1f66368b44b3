"""Domain models for gitlab-users.

All models are **frozen** dataclasses — immutable value objects built
transiently from decoded API responses and discarded at process exit.
Nothing here performs I/O.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from gitlab_users.exceptions import ResponseDecodeError


# ---------------------------------------------------------------------------
# Field decoding helpers
# ---------------------------------------------------------------------------

def _parse_datetime(value: object, field: str) -> datetime | None:
    """Decode an ISO-8601 timestamp such as ``2012-05-23T08:00:58.000Z``."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ResponseDecodeError(f"Field {field!r} is not a timestamp: {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ResponseDecodeError(
            f"Field {field!r} is not a timestamp: {value!r}",
        ) from exc


def _parse_date(value: object, field: str) -> date | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ResponseDecodeError(f"Field {field!r} is not a date: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ResponseDecodeError(f"Field {field!r} is not a date: {value!r}") from exc


def _text(raw: dict[str, Any], field: str) -> str:
    value = raw.get(field)
    return "" if value is None else str(value)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class User:
    """One account on the remote GitLab instance."""

    id: int
    """Numeric identifier, unique and stable."""

    name: str
    """Display name."""

    username: str
    """Login handle."""

    state: str
    """Lifecycle state, e.g. ``active`` or ``blocked``."""

    created_at: datetime | None
    public_email: str | None
    last_sign_in_at: datetime | None
    confirmed_at: datetime | None
    last_activity_on: date | None

    email: str
    """Primary email (only visible to administrators)."""

    current_sign_in_at: datetime | None
    external: bool
    is_admin: bool

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> User:
        """Build a :class:`User` from one decoded JSON object.

        Raises
        ------
        ResponseDecodeError
            If ``id`` is missing or not an integer, or a timestamp
            field is malformed.
        """
        raw_id = raw.get("id")
        if not isinstance(raw_id, int) or isinstance(raw_id, bool):
            raise ResponseDecodeError(f"User object has no integer id: {raw_id!r}")

        public_email = raw.get("public_email")
        return cls(
            id=raw_id,
            name=_text(raw, "name"),
            username=_text(raw, "username"),
            state=_text(raw, "state"),
            created_at=_parse_datetime(raw.get("created_at"), "created_at"),
            public_email=str(public_email) if public_email else None,
            last_sign_in_at=_parse_datetime(raw.get("last_sign_in_at"), "last_sign_in_at"),
            confirmed_at=_parse_datetime(raw.get("confirmed_at"), "confirmed_at"),
            last_activity_on=_parse_date(raw.get("last_activity_on"), "last_activity_on"),
            email=_text(raw, "email"),
            current_sign_in_at=_parse_datetime(
                raw.get("current_sign_in_at"), "current_sign_in_at",
            ),
            external=bool(raw.get("external", False)),
            is_admin=bool(raw.get("is_admin", False)),
        )


@dataclass(frozen=True, slots=True)
class FoundUser:
    """Reduced view of a :class:`User` produced by the search filter."""

    id: int
    name: str
    username: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> FoundUser:
        return cls(id=user.id, name=user.name, username=user.username, email=user.email)


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UserPage:
    """One page of the listing endpoint plus its boundary metadata.

    ``number`` and ``total_pages`` come from the ``X-Page`` and
    ``X-Total-Pages`` response headers.
    """

    number: int
    total_pages: int
    users: tuple[User, ...]


# ---------------------------------------------------------------------------
# Create / block
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NewUser:
    """Input collected by the interactive create flow."""

    name: str
    email: str
    username: str

    def to_payload(self) -> dict[str, str]:
        """Return the JSON body for ``POST users``.

        GitLab sends a password-reset link instead of requiring a
        password when ``reset_password`` is set.
        """
        return {
            "email": self.email,
            "name": self.name,
            "username": self.username,
            "reset_password": "true",
        }


@dataclass(frozen=True, slots=True)
class HttpStatus:
    """Numeric code and reason phrase of an HTTP response."""

    code: int
    reason: str

    def __str__(self) -> str:
        return f"{self.code} {self.reason}".rstrip()

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300


class BlockOutcome(enum.Enum):
    """Client-side interpretation of a block request."""

    BLOCKED = "blocked"
    NOT_FOUND = "not_found"
    ALREADY_BLOCKED = "already_blocked"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class BlockResult:
    """Outcome of ``POST users/<id>/block`` together with its raw status."""

    user_id: str
    outcome: BlockOutcome
    status: HttpStatus
