"""
Credential Provider Module

Isolates the single piece of ambient process state the updater reads: the
GitHub token. The same token authenticates git over HTTPS (basic auth) and
the GitHub REST client.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import quote, urlsplit, urlunsplit
import os

from .exceptions import ConfigurationError

TOKEN_VARIABLES = ("GIT_TOKEN", "GH_TOKEN")


@dataclass(frozen=True)
class GitCredentials:
    """Username and token used for git transport and the GitHub API."""

    username: str
    token: str = field(repr=False)

    def authenticated_url(self, url: str) -> str:
        """Return ``url`` with basic-auth credentials embedded.

        Only HTTP(S) URLs are rewritten; local paths and SSH URLs are
        returned unchanged.
        """
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https"):
            return url
        host = parts.hostname or ""
        if parts.port:
            host = f"{host}:{parts.port}"
        userinfo = f"{quote(self.username, safe='')}:{quote(self.token, safe='')}"
        return urlunsplit((parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment))

    def redact(self, text: str) -> str:
        """Remove the token from ``text`` before it is logged or raised."""
        if not self.token:
            return text
        return text.replace(self.token, "***").replace(quote(self.token, safe=""), "***")


class EnvironmentTokenProvider:
    """Reads the GitHub token from environment variables."""

    def __init__(self, env: Optional[Mapping[str, str]] = None, variables=TOKEN_VARIABLES):
        self.env = os.environ if env is None else env
        self.variables = variables

    def get_token(self) -> str:
        for name in self.variables:
            if token := self.env.get(name, "").strip():
                return token
        raise ConfigurationError(f"{' or '.join(self.variables)} is required")

    def get_credentials(self, username: str) -> GitCredentials:
        return GitCredentials(username=username, token=self.get_token())
