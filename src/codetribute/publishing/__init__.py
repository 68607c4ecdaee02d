"""Publishing the work log to a GitHub repository."""

from codetribute.publishing.auth import AuthProvider, TokenAuthProvider
from codetribute.publishing.github import GitHubClient
from codetribute.publishing.models import GitHubUser, RemoteLogDocument, Session
from codetribute.publishing.publisher import RemotePublisher

__all__ = [
    "AuthProvider",
    "GitHubClient",
    "GitHubUser",
    "RemoteLogDocument",
    "RemotePublisher",
    "Session",
    "TokenAuthProvider",
]
