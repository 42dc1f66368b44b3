"""Plain-text rendering of users and command outcomes.

Output goes to stdout in fixed, grep-friendly formats; Rich is not used
here so that the output can be piped unchanged.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from gitlab_users.core.models import BlockOutcome, BlockResult, FoundUser, HttpStatus, User

SEPARATOR: str = "-----------------------"
NO_USERS_FOUND: str = "No users found"

_BLOCK_MESSAGES: dict[BlockOutcome, str] = {
    BlockOutcome.BLOCKED: "UserID {id} has been blocked",
    BlockOutcome.NOT_FOUND: "ERROR: Unable to find UserID {id}",
    BlockOutcome.ALREADY_BLOCKED: "ERROR: UserID {id} is already blocked",
    BlockOutcome.FAILED: "Error: something went wrong while trying to block UserID {id}",
}


def format_found_user(user: FoundUser) -> str:
    return f"{user.id} \t{user.name} \t{user.username} \t{user.email}"


def display_all(users: Sequence[User], *, stream: TextIO | None = None) -> None:
    """Print identifier and name of every user, separated by a rule."""
    out = stream or sys.stdout
    for user in users:
        print(SEPARATOR, file=out)
        print(f"ID : {user.id}", file=out)
        print(f"Name : {user.name}", file=out)


def display_search(found: Sequence[FoundUser], *, stream: TextIO | None = None) -> None:
    """Print one tab-separated row per match, or the no-match line."""
    out = stream or sys.stdout
    if not found:
        print(NO_USERS_FOUND, file=out)
        return
    for user in found:
        print(format_found_user(user), file=out)


def display_block_result(result: BlockResult, *, stream: TextIO | None = None) -> None:
    """Print the outcome message followed by the raw status line."""
    out = stream or sys.stdout
    print(_BLOCK_MESSAGES[result.outcome].format(id=result.user_id), file=out)
    print(str(result.status), file=out)


def display_status(status: HttpStatus, *, stream: TextIO | None = None) -> None:
    print(str(status), file=stream or sys.stdout)
