"""Interactive collection of new-user details for the CLI layer.

This module is responsible for:

* Prompting for name, email and username (in that order) via
  questionary.
* Returning the answers as a :class:`~gitlab_users.core.models.NewUser`.

Validation happens in :mod:`gitlab_users.core.validation`, not here.
"""

from __future__ import annotations

from typing import Any

from gitlab_users.core.models import NewUser
from gitlab_users.exceptions import MissingDependencyError, PromptCancelledError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _ask(questionary: Any, label: str) -> str:
    answer: str | None = questionary.text(f"{label}:").ask()  # None on Ctrl+C / Esc
    if answer is None:
        raise PromptCancelledError(
            f"No {label.lower()} entered.",
            hint="Type a value and press Enter.",
        )
    return answer.rstrip("\r\n")


def prompt_new_user() -> NewUser:
    """Ask for the three fields needed to create an account.

    Raises
    ------
    PromptCancelledError
        If the user cancels any of the prompts.
    MissingDependencyError
        If questionary is not importable.
    """
    questionary = _import_questionary()

    name = _ask(questionary, "Name")
    email = _ask(questionary, "Email")
    username = _ask(questionary, "Username")

    return NewUser(name=name, email=email, username=username)
