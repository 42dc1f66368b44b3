"""requests-backed implementation of :class:`~gitlab_users.core.protocols.UsersApi`.

This module is the **only** place in the codebase that talks HTTP.
All ``requests`` and JSON errors are caught here and re-raised as typed
:class:`~gitlab_users.exceptions.GitlabUsersError` subclasses — nothing
raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

import requests

from gitlab_users.core.models import HttpStatus, NewUser, User, UserPage
from gitlab_users.exceptions import ApiConnectionError, PaginationError, ResponseDecodeError
from gitlab_users.utils.constants import (
    DEFAULT_BASE_URL,
    PAGE_HEADER,
    PER_PAGE,
    TOTAL_PAGES_HEADER,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"(private_token=)[^&\s)'\"]*")


def redact_token(text: str) -> str:
    """Mask the value of every ``private_token`` query parameter in *text*."""
    return _TOKEN_RE.sub(r"\1[REDACTED]", text)


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def parse_page_header(headers: Mapping[str, str], name: str) -> int:
    """Read a pagination header as an integer.

    Raises
    ------
    PaginationError
        When the header is absent or not a base-10 integer.
    """
    raw = headers.get(name)
    if raw is None:
        raise PaginationError(
            f"Response is missing the {name} header.",
            hint="Check that --base-url points at a GitLab /api/v4/ root.",
        )
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise PaginationError(f"Header {name} is not a number: {raw!r}") from exc


class GitlabUsersClient:
    """Concrete :class:`UsersApi` backed by a :class:`requests.Session`.

    Usage::

        with GitlabUsersClient("https://git.example.com/api/v4/") as client:
            page = client.list_users(token, active=True, page=1)

    No timeout is configured; requests' transport defaults apply.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url: str = base_url if base_url.endswith("/") else base_url + "/"
        self._session: requests.Session = session or requests.Session()
        self._session.headers.setdefault("User-Agent", USER_AGENT)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> GitlabUsersClient:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str],
        **kwargs: Any,
    ) -> requests.Response:
        url = self.base_url + path
        logger.debug(
            "%s %s %s", method, url,
            {k: v for k, v in params.items() if k != "private_token"},
        )
        try:
            response = self._session.request(method, url, params=params, **kwargs)
        except requests.RequestException as exc:
            detail = redact_token(str(exc))
            token = params.get("private_token")
            if token:
                detail = detail.replace(token, "[REDACTED]")
            raise ApiConnectionError(
                f"{method} {url} failed: {detail}",
                hint="Check your network connection and the --base-url value.",
            ) from exc
        logger.debug("%s %s -> %s %s", method, url, response.status_code, response.reason)
        return response

    @staticmethod
    def _status(response: requests.Response) -> HttpStatus:
        return HttpStatus(code=response.status_code, reason=response.reason or "")

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_users(self, token: str, *, active: bool, page: int) -> UserPage:
        """GET one page of ``users`` and decode it into a :class:`UserPage`."""
        params = {
            "active": _bool_param(active),
            "external": "false",
            "order_by": "id",
            "page": str(page),
            "per_page": str(PER_PAGE),
            "skip_ldap": "false",
            "sort": "desc",
            "with_custom_attributes": "false",
            "private_token": token,
        }
        response = self._request("GET", "users", params=params)

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise ResponseDecodeError(
                f"Users page {page} is not valid JSON "
                f"(HTTP {response.status_code} {response.reason}).",
                hint="An invalid token usually yields an error page instead of JSON.",
            ) from exc

        if not isinstance(body, list) or not all(isinstance(e, dict) for e in body):
            raise ResponseDecodeError(
                f"Users page {page} is not a JSON array of users "
                f"(HTTP {response.status_code} {response.reason}).",
            )

        return UserPage(
            number=parse_page_header(response.headers, PAGE_HEADER),
            total_pages=parse_page_header(response.headers, TOTAL_PAGES_HEADER),
            users=tuple(User.from_api(entry) for entry in body),
        )

    def create_user(self, token: str, new_user: NewUser) -> HttpStatus:
        """POST the JSON payload for *new_user*; the body is not inspected."""
        response = self._request(
            "POST",
            "users",
            params={"private_token": token},
            json=new_user.to_payload(),
        )
        return self._status(response)

    def block_user(self, token: str, user_id: str) -> HttpStatus:
        """POST an empty form body to ``users/<id>/block``."""
        response = self._request(
            "POST",
            f"users/{user_id}/block",
            params={"private_token": token},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        return self._status(response)
