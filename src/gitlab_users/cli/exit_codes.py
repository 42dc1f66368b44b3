"""Exit-code constants used by the CLI layer.

Every exit path uses one of these values.  Remote business outcomes
(user not found, already blocked, any create status) exit with
:data:`SUCCESS`.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed; informational outcomes included."""

GENERAL_ERROR: int = 1
"""A known GitlabUsersError was caught. User-facing message was displayed."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""
