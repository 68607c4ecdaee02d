"""Pytest configuration and fixtures for codetribute tests."""

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from codetribute.activity.models import ActivityAction, ActivityRecord
from codetribute.constants import LOGGER_NAME
from codetribute.publishing.github import GitHubClient
from codetribute.publishing.models import Session
from codetribute.summarization.client import ChatCompletionClient


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo configure_logging so caplog keeps seeing package records."""
    yield
    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)


# =============================================================================
# Workspace Fixtures
# =============================================================================


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an empty workspace directory.

    Returns:
        Path to the workspace root.
    """
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def make_record() -> Callable[..., ActivityRecord]:
    """Factory for activity records with sensible defaults."""

    def _make(
        action: ActivityAction = ActivityAction.MODIFIED,
        file_name: str = "a.txt",
        folder: str = "src",
        content: str | None = None,
    ) -> ActivityRecord:
        return ActivityRecord(action=action, folder=folder, file_name=file_name, content=content)

    return _make


@pytest.fixture
def notifier() -> MagicMock:
    """Mock notifier capturing info/error calls."""
    return MagicMock()


@pytest.fixture
def session() -> Session:
    """A GitHub session for the test account."""
    return Session(access_token="gh-token", account_label="octocat")


# =============================================================================
# HTTP Fixtures
# =============================================================================


class RecordingGitHub:
    """In-memory GitHub contents API behind an httpx.MockTransport.

    Attributes:
        requests: Every request received, in order.
        files: Remote files keyed by (repo, path) with their current sha.
        get_status: Forced status code for contents GETs (None = normal).
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.files: dict[tuple[str, str], dict[str, Any]] = {}
        self.get_status: int | None = None
        self._sha_counter = 0

    def _handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")

        if request.url.path == "/user":
            return httpx.Response(200, json={"login": "octocat"})

        if request.url.path == "/user/repos" and request.method == "POST":
            return httpx.Response(201, json=json.loads(request.content))

        # /repos/{owner}/{repo}/contents/{path}
        if len(parts) >= 5 and parts[0] == "repos" and parts[3] == "contents":
            key = (parts[2], "/".join(parts[4:]))
            if request.method == "GET":
                if self.get_status is not None:
                    return httpx.Response(self.get_status, json={"message": "forced"})
                if key not in self.files:
                    return httpx.Response(404, json={"message": "Not Found"})
                return httpx.Response(200, json={"sha": self.files[key]["sha"], "path": key[1]})
            if request.method == "PUT":
                body = json.loads(request.content)
                current = self.files.get(key)
                if current is not None and body.get("sha") != current["sha"]:
                    return httpx.Response(409, json={"message": "sha mismatch"})
                self._sha_counter += 1
                self.files[key] = {"sha": f"sha-{self._sha_counter}", "content": body["content"]}
                return httpx.Response(201 if current is None else 200, json={"content": {}})

        return httpx.Response(500, json={"message": "unexpected request"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handler)

    def calls(self, method: str) -> list[httpx.Request]:
        """Requests with the given HTTP method against the contents API."""
        return [r for r in self.requests if r.method == method and "/contents/" in r.url.path]


@pytest.fixture
def fake_github() -> RecordingGitHub:
    """Fake GitHub contents API."""
    return RecordingGitHub()


@pytest.fixture
def github_client(fake_github: RecordingGitHub) -> GitHubClient:
    """GitHubClient talking to the fake API."""
    return GitHubClient(api_url="https://api.github.test", transport=fake_github.transport)


@pytest.fixture
def chat_client_factory() -> Callable[[Callable[[httpx.Request], httpx.Response]], ChatCompletionClient]:
    """Build a ChatCompletionClient whose requests are served by ``handler``."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> ChatCompletionClient:
        return ChatCompletionClient(
            api_key="llm-key",
            base_url="https://llm.test/v1",
            transport=httpx.MockTransport(handler),
        )

    return _factory


@pytest.fixture
def completion_response() -> Callable[[str | None], httpx.Response]:
    """Build a chat completion response with a single choice."""

    def _response(content: str | None) -> httpx.Response:
        return httpx.Response(
            200,
            json={"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]},
        )

    return _response
