"""gitlab-users — command-line administration of GitLab user accounts.

Built on the GitLab ``/api/v4/users`` REST API with a layered
architecture (cli → core ← infra).
"""

from gitlab_users.version import __version__

__all__: list[str] = ["__version__"]
