"""Pure ordering and search over a fetched user collection.

Every function here is a deterministic transformation with no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable

from gitlab_users.core.models import FoundUser, User


def sort_users(users: Iterable[User]) -> list[User]:
    """Return a new list ordered by identifier ascending."""
    return sorted(users, key=lambda user: user.id)


def matches(needle: str, user: User) -> bool:
    """Case-sensitive substring test on name, username or email."""
    return needle in user.name or needle in user.username or needle in user.email


def search_users(needle: str, users: Iterable[User]) -> list[FoundUser]:
    """Project every matching user into a :class:`FoundUser`.

    Input order is preserved; callers sort beforehand.
    """
    return [FoundUser.from_user(user) for user in users if matches(needle, user)]
