"""Allow ``python -m gitlab_users`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m gitlab_users`` behaves identically to the ``gitlab-users``
console script.
"""

from __future__ import annotations

from gitlab_users.cli.app import cli

if __name__ == "__main__":
    cli()
