"""Infrastructure layer — HTTP integration with the GitLab API.

Every raw third-party exception must be caught here and re-raised as a
:class:`~gitlab_users.exceptions.GitlabUsersError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from gitlab_users.infra.gitlab_client import GitlabUsersClient, parse_page_header

__all__: list[str] = [
    "GitlabUsersClient",
    "parse_page_header",
]
