"""Stderr diagnostics for gitlab-users: error messages and log records.

Command output (listings, status lines) is plain stdout and lives in
:mod:`gitlab_users.cli.presenter`.  Everything here targets stderr and
renders through Rich when it can be imported; a broken environment
degrades to plain text so errors are still reported.
"""

from __future__ import annotations

import importlib
import logging
import sys
from typing import Any

from gitlab_users.exceptions import MissingDependencyError

LOG_FORMAT: str = "%(name)s: %(message)s"
PLAIN_LOG_FORMAT: str = "%(levelname)s %(name)s: %(message)s"


def _rich_attr(module: str, name: str) -> Any:
    """Import ``rich.<module>.<name>`` or raise ``MissingDependencyError``."""
    try:
        rich_module = importlib.import_module(f"rich.{module}")
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return getattr(rich_module, name)


def get_rich_console() -> Any:
    """Create a Rich console bound to stderr."""
    return _rich_attr("console", "Console")(stderr=True)


def make_log_handler() -> logging.Handler:
    """Build the root log handler: Rich when importable, else plain stderr."""
    try:
        handler_class = _rich_attr("logging", "RichHandler")
        console_ = get_rich_console()
    except MissingDependencyError:
        plain = logging.StreamHandler(sys.stderr)
        plain.setFormatter(logging.Formatter(PLAIN_LOG_FORMAT))
        return plain
    rich_handler: logging.Handler = handler_class(console=console_, show_path=False)
    rich_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="[%X]"))
    return rich_handler


class _ErrorConsole:
    """Prints boundary messages; markup is dropped when Rich is missing."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except MissingDependencyError:
            print(*(_strip_markup(obj) for obj in objects), file=sys.stderr)
            return
        rich_console.print(*objects)


def _strip_markup(obj: object) -> object:
    if not isinstance(obj, str):
        return obj
    for tag in ("[bold red]", "[/bold red]", "[yellow]", "[/yellow]", "[bold]", "[/bold]"):
        obj = obj.replace(tag, "")
    return obj


console = _ErrorConsole()
