"""Core user service — pagination, creation and blocking.

The service depends on a :class:`~gitlab_users.core.protocols.UsersApi`
injected at construction time (dependency inversion), keeping the core
free of any HTTP imports.

Guarantees
----------
* Pure orchestration — no ``print()``, no direct network access.
* Only :class:`~gitlab_users.exceptions.GitlabUsersError` subclasses
  escape.
* Pages are requested strictly one after another; nothing is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TypeVar

from gitlab_users.core.models import (
    BlockOutcome,
    BlockResult,
    HttpStatus,
    NewUser,
    User,
    UserPage,
)
from gitlab_users.core.protocols import UsersApi
from gitlab_users.core.user_filter import sort_users
from gitlab_users.core.validation import validate_new_user
from gitlab_users.exceptions import ApiConnectionError, GitlabUsersError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_BLOCK_OUTCOMES: dict[int, BlockOutcome] = {
    201: BlockOutcome.BLOCKED,
    403: BlockOutcome.ALREADY_BLOCKED,
    404: BlockOutcome.NOT_FOUND,
}


def _guarded(call: Callable[[], _T], action: str) -> _T:
    """Run *call* and ensure only our exceptions escape."""
    try:
        return call()
    except GitlabUsersError:
        raise
    except Exception as exc:
        raise ApiConnectionError(f"Unexpected error while {action}: {exc}") from exc


# ---------------------------------------------------------------------------
# Lazy pagination
# ---------------------------------------------------------------------------

class UserPager:
    """Restartable, finite, lazy iterable over the user listing.

    Every call to :func:`iter` starts again at page 1.  The current page
    and total page count are taken from the first response; the remaining
    pages are requested only as the iterator is advanced.
    """

    def __init__(self, api: UsersApi, token: str, *, active: bool = True) -> None:
        self._api: UsersApi = api
        self._token: str = token
        self._active: bool = active

    def _page(self, number: int) -> UserPage:
        logger.debug("Requesting users page %d (active=%s)", number, self._active)
        return _guarded(
            lambda: self._api.list_users(self._token, active=self._active, page=number),
            f"fetching users page {number}",
        )

    def __iter__(self) -> Iterator[UserPage]:
        first = self._page(1)
        yield first

        current, total = first.number, first.total_pages
        while current < total:
            current += 1
            yield self._page(current)

    def iter_users(self) -> Iterator[User]:
        """Yield users one by one, fetching further pages on demand."""
        for page in self:
            yield from page.users


class UserService:
    """Stateless service behind every CLI action.

    Parameters
    ----------
    api:
        Any object satisfying the :class:`UsersApi` protocol.
    """

    def __init__(self, api: UsersApi) -> None:
        self._api: UsersApi = api

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def pager(self, token: str, *, active: bool = True) -> UserPager:
        return UserPager(self._api, token, active=active)

    def fetch_users(self, token: str, *, active: bool = True) -> list[User]:
        """Return every user, concatenated in page order (page 1 first).

        Raises
        ------
        ApiConnectionError, ResponseDecodeError, PaginationError
            On the first failing page; no partial result is returned.
        """
        users: list[User] = []
        for page in self.pager(token, active=active):
            users.extend(page.users)
            logger.debug(
                "Accumulated %d users after page %d/%d",
                len(users), page.number, page.total_pages,
            )
        return users

    def fetch_sorted_users(self, token: str, *, active: bool = True) -> list[User]:
        return sort_users(self.fetch_users(token, active=active))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create_user(self, token: str, new_user: NewUser) -> HttpStatus:
        """Validate *new_user* and POST it.

        The response status is returned as-is; a non-2xx status is not an
        error here and the response body is never inspected.

        Raises
        ------
        InvalidUsernameError, InvalidEmailError
            Before any request is made.
        ApiConnectionError
            When the request cannot be completed.
        """
        validate_new_user(new_user)
        status = _guarded(
            lambda: self._api.create_user(token, new_user),
            f"creating user {new_user.username}",
        )
        if not status.ok:
            logger.info("Create request for %s answered %s", new_user.username, status)
        return status

    # ------------------------------------------------------------------
    # Block
    # ------------------------------------------------------------------

    @staticmethod
    def classify_block_status(status: HttpStatus) -> BlockOutcome:
        """Map a block response code onto a :class:`BlockOutcome`."""
        return _BLOCK_OUTCOMES.get(status.code, BlockOutcome.FAILED)

    def block_user(self, token: str, user_id: str) -> BlockResult:
        """POST to the block endpoint and interpret the status code."""
        status = _guarded(
            lambda: self._api.block_user(token, user_id),
            f"blocking user {user_id}",
        )
        return BlockResult(
            user_id=user_id,
            outcome=self.classify_block_status(status),
            status=status,
        )
