"""Shared pytest fixtures and configuration for the gitlab-users test suite.

Guidelines
----------
* No internet access in any test.
* HTTP is mocked at the ``requests.Session`` boundary or replaced by an
  in-memory ``UsersApi`` fake.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from gitlab_users.core.models import HttpStatus, NewUser, User, UserPage


def _make_user(**overrides: Any) -> User:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, Any] = {
        "id": 1,
        "name": "Jane Smith",
        "username": "jsmith",
        "state": "active",
        "created_at": None,
        "public_email": None,
        "last_sign_in_at": None,
        "confirmed_at": None,
        "last_activity_on": None,
        "email": "jane.smith@example.com",
        "current_sign_in_at": None,
        "external": False,
        "is_admin": False,
    }
    defaults.update(overrides)
    return User(**defaults)


class FakeUsersApi:
    """In-memory ``UsersApi`` serving pre-built pages.

    ``pages`` are 1-indexed by position; every call is recorded.
    """

    def __init__(
        self,
        pages: list[list[User]] | None = None,
        *,
        create_status: HttpStatus | None = None,
        block_status: HttpStatus | None = None,
    ) -> None:
        self.pages: list[list[User]] = pages if pages is not None else [[]]
        self.create_status = create_status or HttpStatus(201, "Created")
        self.block_status = block_status or HttpStatus(201, "Created")
        self.list_calls: list[tuple[str, bool, int]] = []
        self.created: list[tuple[str, NewUser]] = []
        self.blocked: list[tuple[str, str]] = []
        self.closed = False

    def __enter__(self) -> FakeUsersApi:
        return self

    def __exit__(self, *_args: object) -> None:
        self.closed = True

    def list_users(self, token: str, *, active: bool, page: int) -> UserPage:
        self.list_calls.append((token, active, page))
        return UserPage(
            number=page,
            total_pages=len(self.pages),
            users=tuple(self.pages[page - 1]),
        )

    def create_user(self, token: str, new_user: NewUser) -> HttpStatus:
        self.created.append((token, new_user))
        return self.create_status

    def block_user(self, token: str, user_id: str) -> HttpStatus:
        self.blocked.append((token, user_id))
        return self.block_status


@pytest.fixture
def user_factory() -> Callable[..., User]:
    """Return a factory building a :class:`User` with overridable defaults."""
    return _make_user


@pytest.fixture
def api_factory() -> type[FakeUsersApi]:
    """Return the in-memory ``UsersApi`` class; call it with pages and statuses."""
    return FakeUsersApi
