"""Models for the GitHub contents API and auth sessions."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class Session:
    """Credential handed out by the auth collaborator.

    Attributes:
        access_token: Token sent in the Authorization header.
        account_label: Login of the account that owns the log repository.
    """

    access_token: str
    account_label: str


class RemoteLogDocument(BaseModel):
    """A file as returned by ``GET /repos/{owner}/{repo}/contents/{path}``.

    Only ``sha`` matters for publishing: it is the version token that must
    accompany an update so the store can reject stale overwrites.
    """

    model_config = ConfigDict(extra="ignore")

    sha: str
    path: str | None = None
    size: int | None = None
    content: str | None = None


class GitHubUser(BaseModel):
    """Subset of ``GET /user`` used to scope the repository."""

    model_config = ConfigDict(extra="ignore")

    login: str
