"""Protocols (interfaces) consumed by the core layer.

Core code depends ONLY on these protocols — never on the concrete
HTTP client — so services can be driven by in-memory fakes in tests.
"""

from __future__ import annotations

from typing import Protocol

from gitlab_users.core.models import HttpStatus, NewUser, UserPage


class UsersApi(Protocol):
    """Contract for the GitLab users endpoints.

    Implementations must map all transport and decoding failures to
    :class:`~gitlab_users.exceptions.GitlabUsersError` subclasses.
    """

    def list_users(self, token: str, *, active: bool, page: int) -> UserPage:
        """Fetch one page of the user listing.

        Raises
        ------
        ApiConnectionError
            When the request cannot be completed.
        ResponseDecodeError
            When the body is not a JSON array of user objects.
        PaginationError
            When ``X-Page`` or ``X-Total-Pages`` is missing or not numeric.
        """
        ...  # pragma: no cover

    def create_user(self, token: str, new_user: NewUser) -> HttpStatus:
        """POST *new_user* and return the response status, whatever it is."""
        ...  # pragma: no cover

    def block_user(self, token: str, user_id: str) -> HttpStatus:
        """POST to the block endpoint for *user_id* and return the status."""
        ...  # pragma: no cover
