"""Static defaults for talking to the GitLab users API.

There is no configuration file and no environment lookup; the only
per-invocation override is the ``--base-url`` flag.
"""

from __future__ import annotations

from gitlab_users.version import __version__

DEFAULT_BASE_URL: str = "https://git.domain.com/api/v4/"
"""API root, always ending in ``/``."""

PLACEHOLDER_TOKEN: str = "YOUR_ACCESS_TOKEN_HERE"
"""Default value of ``-t`` when no token is supplied."""

PER_PAGE: int = 100
"""Page size requested from the listing endpoint (GitLab maximum)."""

PAGE_HEADER: str = "X-Page"
TOTAL_PAGES_HEADER: str = "X-Total-Pages"

USER_AGENT: str = f"gitlab-users/{__version__}"

MAX_EMAIL_LENGTH: int = 254
