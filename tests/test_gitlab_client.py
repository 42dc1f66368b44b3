"""Tests for the requests-backed client (infra/gitlab_client.py).

``requests.Session`` is mocked — no internet access.  These tests verify:

* Query parameters and URLs for every endpoint
* Pagination header parsing and its failure modes
* JSON decoding failures mapped to ``ResponseDecodeError``
* Transport failures mapped to ``ApiConnectionError`` without leaking the token
"""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from gitlab_users.core.models import HttpStatus, NewUser
from gitlab_users.exceptions import ApiConnectionError, PaginationError, ResponseDecodeError
from gitlab_users.infra.gitlab_client import GitlabUsersClient, parse_page_header, redact_token

BASE = "https://git.example.com/api/v4/"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _response(
    body: Any = None,
    *,
    headers: dict[str, str] | None = None,
    status: int = 200,
    reason: str = "OK",
    json_error: bool = False,
) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.reason = reason
    resp.headers = CaseInsensitiveDict(headers or {})
    if json_error:
        resp.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
    else:
        resp.json.return_value = body
    return resp


def _page_headers(page: int = 1, total: int = 1) -> dict[str, str]:
    return {"X-Page": str(page), "X-Total-Pages": str(total)}


def _client(*responses: Any) -> tuple[GitlabUsersClient, MagicMock]:
    session = MagicMock()
    session.request.side_effect = list(responses)
    return GitlabUsersClient(BASE, session=session), session


# ---------------------------------------------------------------------------
# parse_page_header
# ---------------------------------------------------------------------------

class TestParsePageHeader:
    def test_integer(self) -> None:
        assert parse_page_header({"X-Page": "3"}, "X-Page") == 3

    def test_whitespace_tolerated(self) -> None:
        assert parse_page_header({"X-Page": " 3 "}, "X-Page") == 3

    def test_missing_raises(self) -> None:
        with pytest.raises(PaginationError, match="missing the X-Total-Pages"):
            parse_page_header({}, "X-Total-Pages")

    def test_non_numeric_raises(self) -> None:
        with pytest.raises(PaginationError, match="not a number"):
            parse_page_header({"X-Page": "one"}, "X-Page")


# ---------------------------------------------------------------------------
# list_users
# ---------------------------------------------------------------------------

class TestListUsers:
    def test_request_shape(self) -> None:
        client, session = _client(_response([], headers=_page_headers()))
        client.list_users("tok", active=True, page=2)

        session.request.assert_called_once()
        args, kwargs = session.request.call_args
        assert args == ("GET", BASE + "users")
        assert kwargs["params"] == {
            "active": "true",
            "external": "false",
            "order_by": "id",
            "page": "2",
            "per_page": "100",
            "skip_ldap": "false",
            "sort": "desc",
            "with_custom_attributes": "false",
            "private_token": "tok",
        }
        assert list(kwargs["params"])[0] == "active"

    def test_inactive_flag(self) -> None:
        client, session = _client(_response([], headers=_page_headers()))
        client.list_users("tok", active=False, page=1)
        assert session.request.call_args.kwargs["params"]["active"] == "false"

    def test_decodes_users_and_headers(self) -> None:
        body = [
            {"id": 2, "name": "B", "username": "b", "email": "b@x.com"},
            {"id": 1, "name": "A", "username": "a", "email": "a@x.com"},
        ]
        client, _ = _client(_response(body, headers=_page_headers(1, 4)))
        page = client.list_users("tok", active=True, page=1)

        assert page.number == 1
        assert page.total_pages == 4
        assert [u.id for u in page.users] == [2, 1]

    def test_header_lookup_is_case_insensitive(self) -> None:
        client, _ = _client(
            _response([], headers={"x-page": "1", "x-total-pages": "1"}),
        )
        assert client.list_users("tok", active=True, page=1).total_pages == 1

    def test_missing_header_raises(self) -> None:
        client, _ = _client(_response([], headers={"X-Page": "1"}))
        with pytest.raises(PaginationError):
            client.list_users("tok", active=True, page=1)

    def test_invalid_json_raises(self) -> None:
        client, _ = _client(
            _response(status=401, reason="Unauthorized", json_error=True,
                      headers=_page_headers()),
        )
        with pytest.raises(ResponseDecodeError, match="not valid JSON"):
            client.list_users("tok", active=True, page=1)

    def test_error_object_raises(self) -> None:
        client, _ = _client(
            _response({"message": "401 Unauthorized"}, status=401, reason="Unauthorized"),
        )
        with pytest.raises(ResponseDecodeError, match="not a JSON array"):
            client.list_users("tok", active=True, page=1)

    def test_transport_error_raises(self) -> None:
        client, _ = _client(requests.ConnectionError("dns failure"))
        with pytest.raises(ApiConnectionError, match="dns failure"):
            client.list_users("tok", active=True, page=1)

    def test_transport_error_chained(self) -> None:
        original = requests.Timeout("slow")
        client, _ = _client(original)
        with pytest.raises(ApiConnectionError) as exc_info:
            client.list_users("tok", active=True, page=1)
        assert exc_info.value.__cause__ is original

    def test_transport_error_omits_token(self) -> None:
        client, _ = _client(
            requests.ConnectionError(
                "Max retries exceeded with url: "
                "/api/v4/users?active=true&private_token=SECRETTOKEN123&page=1 "
                "(Caused by NewConnectionError('refused'))",
            ),
        )
        with pytest.raises(ApiConnectionError) as exc_info:
            client.list_users("SECRETTOKEN123", active=True, page=1)
        assert "SECRETTOKEN123" not in str(exc_info.value)
        assert "[REDACTED]" in str(exc_info.value)


# ---------------------------------------------------------------------------
# create_user / block_user
# ---------------------------------------------------------------------------

class TestCreateUser:
    def test_posts_json_payload(self) -> None:
        client, session = _client(_response(status=201, reason="Created"))
        status = client.create_user(
            "tok", NewUser(name="Bob", email="bob@example.com", username="bob"),
        )

        assert status == HttpStatus(201, "Created")
        args, kwargs = session.request.call_args
        assert args == ("POST", BASE + "users")
        assert kwargs["params"] == {"private_token": "tok"}
        assert kwargs["json"] == {
            "email": "bob@example.com",
            "name": "Bob",
            "username": "bob",
            "reset_password": "true",
        }

    def test_error_status_returned(self) -> None:
        client, _ = _client(_response(status=409, reason="Conflict"))
        status = client.create_user("tok", NewUser(name="B", email="b@x.com", username="b"))
        assert str(status) == "409 Conflict"


class TestBlockUser:
    def test_posts_to_block_endpoint(self) -> None:
        client, session = _client(_response(status=201, reason="Created"))
        status = client.block_user("tok", "42")

        assert str(status) == "201 Created"
        args, kwargs = session.request.call_args
        assert args == ("POST", BASE + "users/42/block")
        assert kwargs["params"] == {"private_token": "tok"}
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
        assert "json" not in kwargs
        assert "data" not in kwargs

    def test_transport_error_raises(self) -> None:
        client, _ = _client(requests.ConnectionError("refused"))
        with pytest.raises(ApiConnectionError):
            client.block_user("tok", "42")

    def test_transport_error_omits_token(self) -> None:
        client, _ = _client(requests.ConnectionError("refused for token SECRETTOKEN123"))
        with pytest.raises(ApiConnectionError) as exc_info:
            client.block_user("SECRETTOKEN123", "42")
        assert "SECRETTOKEN123" not in str(exc_info.value)


# ---------------------------------------------------------------------------
# Construction / lifecycle
# ---------------------------------------------------------------------------

class TestClientLifecycle:
    def test_trailing_slash_added(self) -> None:
        client = GitlabUsersClient("https://git.example.com/api/v4", session=MagicMock())
        assert client.base_url == BASE

    def test_context_manager_closes_session(self) -> None:
        session = MagicMock()
        with GitlabUsersClient(BASE, session=session):
            pass
        session.close.assert_called_once()


# ---------------------------------------------------------------------------
# Token hygiene
# ---------------------------------------------------------------------------

class TestRedactToken:
    def test_masks_query_value(self) -> None:
        text = "url: /users?active=true&private_token=abc123&page=2"
        assert redact_token(text) == "url: /users?active=true&private_token=[REDACTED]&page=2"

    def test_stops_at_quote_and_paren(self) -> None:
        text = "'/users?private_token=abc')"
        assert redact_token(text) == "'/users?private_token=[REDACTED]')"

    def test_text_without_token_unchanged(self) -> None:
        assert redact_token("connection refused") == "connection refused"


class TestDebugLogging:
    def test_token_never_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="gitlab_users.infra.gitlab_client")
        client, _ = _client(
            _response([{"id": 1}], headers=_page_headers()),
            _response(status=201, reason="Created"),
            _response(status=201, reason="Created"),
        )

        client.list_users("SECRET", active=True, page=1)
        client.create_user("SECRET", NewUser(name="Bob", email="b@x.com", username="bob"))
        client.block_user("SECRET", "7")

        assert len(caplog.records) >= 6
        for record in caplog.records:
            assert "SECRET" not in record.getMessage()
