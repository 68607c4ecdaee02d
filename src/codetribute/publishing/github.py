"""GitHub REST client for the repository holding the work log."""

import logging
from typing import Any

import httpx

from codetribute.constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_PUBLISH_TIMEOUT,
    GITHUB_ACCEPT_HEADER,
    HTTP_STATUS_CREATED,
    HTTP_STATUS_NOT_FOUND,
)
from codetribute.exceptions import PublishError
from codetribute.publishing.models import GitHubUser, RemoteLogDocument, Session

logger = logging.getLogger(__name__)


class GitHubClient:
    """Minimal GitHub API surface: user lookup, contents upsert, repo creation."""

    def __init__(
        self,
        api_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_PUBLISH_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_url: GitHub REST API base URL.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.api_url = api_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)

    @staticmethod
    def _get_headers(token: str) -> dict[str, str]:
        return {
            "Authorization": f"token {token}",
            "Accept": GITHUB_ACCEPT_HEADER,
        }

    def _contents_url(self, session: Session, repo: str, path: str) -> str:
        return f"{self.api_url}/repos/{session.account_label}/{repo}/contents/{path}"

    def get_authenticated_user(self, token: str) -> GitHubUser:
        """Look up the account a token belongs to.

        Raises:
            httpx.HTTPError: If the request fails.
        """
        response = self._client.get(f"{self.api_url}/user", headers=self._get_headers(token))
        response.raise_for_status()
        return GitHubUser.model_validate(response.json())

    def get_document(self, session: Session, repo: str, path: str) -> RemoteLogDocument | None:
        """Fetch the current version of a file.

        Returns:
            The document, or None if the file does not exist yet.

        Raises:
            httpx.HTTPStatusError: For any error status other than 404.
            httpx.HTTPError: On transport failures.
        """
        response = self._client.get(
            self._contents_url(session, repo, path),
            headers=self._get_headers(session.access_token),
        )
        if response.status_code == HTTP_STATUS_NOT_FOUND:
            logger.info(f"{path} does not exist in {repo} yet")
            return None
        response.raise_for_status()
        document = RemoteLogDocument.model_validate(response.json())
        logger.debug(f"Fetched existing file SHA: {document.sha}")
        return document

    def put_document(
        self,
        session: Session,
        repo: str,
        path: str,
        content_b64: str,
        message: str,
        sha: str | None = None,
    ) -> dict[str, Any]:
        """Create or update a file.

        Args:
            session: Authenticated session.
            repo: Repository name.
            path: File path inside the repository.
            content_b64: Base64-encoded file content.
            message: Commit message.
            sha: Version token of the file being replaced; omitted on create.

        Returns:
            Decoded response body.

        Raises:
            httpx.HTTPStatusError: If the store rejects the write (e.g. 409
                on a stale sha).
        """
        body: dict[str, Any] = {"message": message, "content": content_b64}
        if sha is not None:
            body["sha"] = sha

        response = self._client.put(
            self._contents_url(session, repo, path),
            headers=self._get_headers(session.access_token),
            json=body,
        )
        response.raise_for_status()
        data: dict[str, Any] = response.json()
        return data

    def create_repository(self, session: Session, name: str, private: bool = True) -> None:
        """Create a repository for the authenticated user.

        Raises:
            PublishError: If GitHub does not answer 201 Created.
            httpx.HTTPError: On transport failures.
        """
        response = self._client.post(
            f"{self.api_url}/user/repos",
            headers=self._get_headers(session.access_token),
            json={"name": name, "private": private},
        )
        if response.status_code != HTTP_STATUS_CREATED:
            logger.error(f"GitHub API response: {response.status_code} {response.text[:500]}")
            raise PublishError(
                f"Failed to create repository {name}",
                status_code=response.status_code,
            )

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
