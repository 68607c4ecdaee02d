"""Remote publisher: upsert the local work log to GitHub."""

import base64
import logging

from codetribute.constants import (
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_REMOTE_PATH,
    DEFAULT_REPO_NAME,
    GITHUB_SCOPE_REPO,
    MSG_AUTH_FAILED,
    MSG_PUBLISH_FAILED,
    MSG_PUBLISH_SUCCESS,
    MSG_REPO_CREATE_FAILED,
    MSG_REPO_CREATED,
)
from codetribute.notifications import Notifier
from codetribute.publishing.auth import AuthProvider
from codetribute.publishing.github import GitHubClient
from codetribute.worklog.persister import LogPersister

logger = logging.getLogger(__name__)


class RemotePublisher:
    """Push the full local log file to a fixed path in the user's repository.

    Each publish re-uploads the whole file rather than a diff, so retrying
    after a transient failure converges to the same remote content. The
    version token is fetched right before every write and never reused.
    """

    def __init__(
        self,
        persister: LogPersister,
        auth: AuthProvider,
        github: GitHubClient,
        notifier: Notifier,
        repo_name: str = DEFAULT_REPO_NAME,
        remote_path: str = DEFAULT_REMOTE_PATH,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
    ):
        self.persister = persister
        self.auth = auth
        self.github = github
        self.notifier = notifier
        self.repo_name = repo_name
        self.remote_path = remote_path
        self.commit_message = commit_message

    def upsert(self) -> bool:
        """Run fetch-then-write against the remote store.

        Returns:
            False if no session could be obtained, True once written.

        Raises:
            Any error from reading the log file, the auth provider, the
            version-token fetch (except 404) or the write.
        """
        session = self.auth.get_session([GITHUB_SCOPE_REPO])
        if session is None:
            self.notifier.error(MSG_AUTH_FAILED)
            return False

        content = base64.b64encode(self.persister.read_bytes()).decode("ascii")

        document = self.github.get_document(session, self.repo_name, self.remote_path)
        sha = document.sha if document else None
        if sha is None:
            logger.info("File does not exist in the repository. Creating a new file.")

        self.github.put_document(
            session,
            self.repo_name,
            self.remote_path,
            content_b64=content,
            message=self.commit_message,
            sha=sha,
        )
        return True

    def publish(self) -> bool:
        """Publish the log and report the outcome to the user.

        Never raises. Failures are logged and sent to the notifier.

        Returns:
            True if the remote file was written.
        """
        logger.info(f"Pushing logs to {self.repo_name}/{self.remote_path}")
        try:
            published = self.upsert()
        except Exception as e:
            logger.error(f"Error pushing logs to GitHub: {e}", exc_info=True)
            self.notifier.error(MSG_PUBLISH_FAILED.format(error=e))
            return False

        if published:
            logger.info("Logs pushed to GitHub successfully")
            self.notifier.info(MSG_PUBLISH_SUCCESS)
        return published

    def create_repository(self) -> bool:
        """Create the private repository that receives the log.

        Returns:
            True if GitHub created the repository.
        """
        try:
            session = self.auth.get_session([GITHUB_SCOPE_REPO])
            if session is None:
                self.notifier.error(MSG_AUTH_FAILED)
                return False
            self.github.create_repository(session, self.repo_name, private=True)
        except Exception as e:
            logger.error(f"Error creating repository {self.repo_name}: {e}")
            self.notifier.error(f"{MSG_REPO_CREATE_FAILED} {e}")
            return False

        logger.info(f"Repository {self.repo_name} created")
        self.notifier.info(MSG_REPO_CREATED)
        return True
