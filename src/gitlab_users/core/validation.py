"""Validation of interactive create-user input.

Runs before any network call.  Only the username and email are
checked; the display name is accepted as typed.
"""

from __future__ import annotations

import re

from gitlab_users.core.models import NewUser
from gitlab_users.exceptions import InvalidEmailError, InvalidUsernameError
from gitlab_users.utils.constants import MAX_EMAIL_LENGTH

_USERNAME_RE = re.compile(r"^[A-Za-z]+$")

_EMAIL_RE = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def validate_username(username: str) -> str:
    """Return *username* unchanged or raise :class:`InvalidUsernameError`."""
    # fullmatch so a trailing "\n" cannot slip past "$"
    if not _USERNAME_RE.fullmatch(username):
        raise InvalidUsernameError(
            f"{username} is not a valid username",
            hint="Usernames may only contain the letters A-Z and a-z.",
        )
    return username


def validate_email(email: str) -> str:
    """Return *email* unchanged or raise :class:`InvalidEmailError`."""
    if len(email) > MAX_EMAIL_LENGTH or not _EMAIL_RE.fullmatch(email):
        raise InvalidEmailError(f"{email} is not a valid email address")
    return email


def validate_new_user(new_user: NewUser) -> NewUser:
    """Validate the username first, then the email."""
    validate_username(new_user.username)
    validate_email(new_user.email)
    return new_user
