"""Core / service layer — business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No direct network I/O; HTTP goes through the ``UsersApi`` protocol.
* No imports from ``cli`` or ``infra``.
"""

from gitlab_users.core.models import (
    BlockOutcome,
    BlockResult,
    FoundUser,
    HttpStatus,
    NewUser,
    User,
    UserPage,
)
from gitlab_users.core.protocols import UsersApi
from gitlab_users.core.user_filter import search_users, sort_users
from gitlab_users.core.user_service import UserPager, UserService

__all__: list[str] = [
    "BlockOutcome",
    "BlockResult",
    "FoundUser",
    "HttpStatus",
    "NewUser",
    "User",
    "UserPage",
    "UserPager",
    "UserService",
    "UsersApi",
    "search_users",
    "sort_users",
]
