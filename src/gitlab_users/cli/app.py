"""CLI application entry point and command routing for gitlab-users.

This module is the **sole error boundary** for the entire application.
Lower layers raise typed :class:`~gitlab_users.exceptions.GitlabUsersError`
subclasses; only :func:`cli` turns them into messages and exit codes.

Architecture notes
------------------
* No business logic lives here — fetching, filtering, validation and
  status interpretation are delegated to the core and infra layers.
* Exactly one action runs per invocation.  Precedence: search → block →
  create → list all.
"""

from __future__ import annotations

import argparse
import logging
import sys

from gitlab_users.cli import exit_codes
from gitlab_users.cli.console import console, make_log_handler
from gitlab_users.exceptions import GitlabUsersError
from gitlab_users.infra.gitlab_client import GitlabUsersClient
from gitlab_users.utils.constants import DEFAULT_BASE_URL, PLACEHOLDER_TOKEN
from gitlab_users.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

_TRUE_WORDS = frozenset({"1", "t", "true", "yes", "y", "on"})
_FALSE_WORDS = frozenset({"0", "f", "false", "no", "n", "off"})


def _parse_bool(value: str) -> bool:
    """Accept ``true``/``false`` style words for ``-a``."""
    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands are not used; single-letter flags select the action:
    * ``gitlab-users``               — list all (active) users
    * ``gitlab-users -s TEXT``       — search users
    * ``gitlab-users -b ID``         — block a user
    * ``gitlab-users -c``            — create a user interactively
    """
    parser = argparse.ArgumentParser(
        prog="gitlab-users",
        description="Manage users of a GitLab instance through its REST API.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-t",
        dest="token",
        default=PLACEHOLDER_TOKEN,
        help="GitLab access token.",
    )
    parser.add_argument(
        "-s",
        dest="search",
        default="",
        help=(
            "Search the userbase by name, username or email (case-sensitive). "
            "Attach values that start with a dash: -s=-foo."
        ),
    )
    parser.add_argument(
        "-c",
        dest="create",
        action="store_true",
        help="Create a user interactively.",
    )
    parser.add_argument(
        "-a",
        dest="active",
        type=_parse_bool,
        nargs="?",
        const=True,
        default=True,
        metavar="BOOL",
        help="Limit listing and search to active users (default: true).",
    )
    parser.add_argument(
        "-b",
        dest="block",
        default="",
        metavar="USER_ID",
        help="User ID to block.",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"GitLab API root (default: {DEFAULT_BASE_URL}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log HTTP requests and pagination to stderr.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    """Route log records to stderr, through Rich when available."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[make_log_handler()],
        force=True,
    )


def _build_client(base_url: str) -> GitlabUsersClient:
    return GitlabUsersClient(base_url)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_list(client: GitlabUsersClient, token: str, active: bool) -> int:
    """Fetch, sort and print every user."""
    from gitlab_users.cli.presenter import display_all
    from gitlab_users.core.user_service import UserService

    users = UserService(client).fetch_sorted_users(token, active=active)
    logger.debug("Listing %d users", len(users))
    display_all(users)
    return exit_codes.SUCCESS


def _handle_search(client: GitlabUsersClient, token: str, active: bool, needle: str) -> int:
    """Fetch, sort and print the users matching *needle*."""
    from gitlab_users.cli.presenter import display_search
    from gitlab_users.core.user_filter import search_users
    from gitlab_users.core.user_service import UserService

    users = UserService(client).fetch_sorted_users(token, active=active)
    display_search(search_users(needle, users))
    return exit_codes.SUCCESS


def _handle_block(client: GitlabUsersClient, token: str, user_id: str) -> int:
    """Block *user_id*; every remote outcome is informational."""
    from gitlab_users.cli.presenter import display_block_result
    from gitlab_users.core.user_service import UserService

    result = UserService(client).block_user(token, user_id)
    display_block_result(result)
    return exit_codes.SUCCESS


def _handle_create(client: GitlabUsersClient, token: str) -> int:
    """Prompt for a new user, validate, POST and print the status line."""
    from gitlab_users.cli.presenter import display_status
    from gitlab_users.cli.user_prompt import prompt_new_user
    from gitlab_users.core.user_service import UserService

    new_user = prompt_new_user()
    status = UserService(client).create_user(token, new_user)
    display_status(status)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the gitlab-users CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    with _build_client(args.base_url) as client:
        if args.search:
            return _handle_search(client, args.token, args.active, args.search)
        if args.block:
            return _handle_block(client, args.token, args.block)
        if args.create:
            return _handle_create(client, args.token)
        return _handle_list(client, args.token, args.active)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` so the process never exits with a raw stack trace
    during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except GitlabUsersError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
