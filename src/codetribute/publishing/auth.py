"""Credential providers for the GitHub publisher."""

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence

import httpx

from codetribute.constants import DEFAULT_GITHUB_TOKEN_ENV
from codetribute.exceptions import AuthenticationError
from codetribute.publishing.github import GitHubClient
from codetribute.publishing.models import Session

logger = logging.getLogger(__name__)


class AuthProvider(ABC):
    """Abstract source of GitHub sessions."""

    @abstractmethod
    def get_session(self, scopes: Sequence[str]) -> Session | None:
        """Return a session for the requested scopes.

        May prompt the user. Returns None when no credential is available,
        which callers report as an authentication failure.
        """


class TokenAuthProvider(AuthProvider):
    """Session from a personal access token.

    The token comes from an environment variable (also populated from .env)
    or, if unset, from an optional interactive prompt. The account label is
    taken from config or looked up with ``GET /user``. The session is
    cached for the lifetime of the provider.
    """

    def __init__(
        self,
        github: GitHubClient,
        token_env: str = DEFAULT_GITHUB_TOKEN_ENV,
        account: str | None = None,
        environment: Mapping[str, str] | None = None,
        prompt: Callable[[], str | None] | None = None,
    ):
        """Initialize provider.

        Args:
            github: Client used to resolve the token's account.
            token_env: Environment variable holding the token.
            account: Account label override.
            environment: Environment variables (read-only, defaults to os.environ).
            prompt: Interactive fallback returning a token or None.
        """
        self.github = github
        self.token_env = token_env
        self.account = account
        self.environment = environment if environment is not None else os.environ
        self.prompt = prompt
        self._session: Session | None = None

    def _read_token(self) -> str | None:
        token = self.environment.get(self.token_env)
        if not token and self.prompt is not None:
            token = self.prompt()
        return token or None

    def get_session(self, scopes: Sequence[str]) -> Session | None:
        """Return the cached session, creating it on first use.

        Raises:
            AuthenticationError: If GitHub rejects the token during the
                account lookup.
        """
        if self._session is not None:
            return self._session

        token = self._read_token()
        if not token:
            logger.warning(f"No GitHub token in {self.token_env}")
            return None

        account = self.account
        if not account:
            try:
                account = self.github.get_authenticated_user(token).login
            except httpx.HTTPError as e:
                raise AuthenticationError(
                    "Could not resolve GitHub account for token",
                    {"token_env": self.token_env, "error": str(e)},
                ) from e

        logger.debug(f"GitHub session established for {account} (scopes={list(scopes)})")
        self._session = Session(access_token=token, account_label=account)
        return self._session
