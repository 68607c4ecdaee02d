"""Wiring of the work-log pipeline for one workspace.

WorkLogService builds the buffer, watcher, summarizer, persister, publisher
and scheduler from configuration, and owns their start/stop lifecycle.
Clients are created once and reused until the service stops.
"""

import logging
from pathlib import Path

from codetribute.activity.buffer import ActivityBuffer
from codetribute.activity.watcher import ActivityWatcher
from codetribute.config import CodetributeConfig, load_config
from codetribute.constants import MSG_NO_WORKSPACE
from codetribute.exceptions import ConfigurationError
from codetribute.notifications import ConsoleNotifier, Notifier
from codetribute.publishing.auth import AuthProvider, TokenAuthProvider
from codetribute.publishing.github import GitHubClient
from codetribute.publishing.publisher import RemotePublisher
from codetribute.scheduler import WorkLogScheduler
from codetribute.summarization.client import (
    ChatCompletionClient,
    create_chat_client_from_config,
)
from codetribute.summarization.summarizer import Summarizer
from codetribute.worklog.persister import LogPersister

logger = logging.getLogger(__name__)


class WorkLogService:
    """Observe a workspace and periodically publish its work log."""

    def __init__(
        self,
        workspace_root: Path | None,
        config: CodetributeConfig | None = None,
        notifier: Notifier | None = None,
        chat_client: ChatCompletionClient | None = None,
        github: GitHubClient | None = None,
        auth: AuthProvider | None = None,
        publish: bool = True,
        interval_seconds: float | None = None,
    ):
        """Initialize the service.

        Args:
            workspace_root: Directory to observe; None or a non-directory
                makes ``start`` fail.
            config: Configuration (loaded from the workspace if omitted).
            notifier: Destination for user-visible messages.
            chat_client: Summarization client (built from config if omitted).
            github: GitHub client (built from config if omitted).
            auth: Session provider (token-based if omitted).
            publish: Whether cycles end with a remote publish.
            interval_seconds: Override of the configured cycle interval.
        """
        self.workspace_root = workspace_root
        root = workspace_root or Path.cwd()
        self.config = config or (load_config(workspace_root) if workspace_root else CodetributeConfig())
        self.notifier = notifier or ConsoleNotifier()

        self.log_path = self.config.get_log_path(root)
        self.buffer = ActivityBuffer()
        self.persister = LogPersister(self.log_path)
        self.watcher = ActivityWatcher(
            workspace_root=root,
            buffer=self.buffer,
            exclude_patterns=self.config.watcher.exclude_patterns,
            ignored_paths=[self.log_path],
            content_limit=self.config.watcher.content_limit,
        )

        self.chat_client = chat_client or create_chat_client_from_config(self.config.summarization)
        self.summarizer = Summarizer(self.chat_client, model=self.config.summarization.model)

        publishing = self.config.publishing
        self.github = github or GitHubClient(api_url=publishing.api_url, timeout=publishing.timeout)
        self.auth = auth or TokenAuthProvider(
            self.github,
            token_env=publishing.token_env,
            account=publishing.account,
        )
        self.publisher = RemotePublisher(
            persister=self.persister,
            auth=self.auth,
            github=self.github,
            notifier=self.notifier,
            repo_name=publishing.repo_name,
            remote_path=publishing.remote_path,
            commit_message=publishing.commit_message,
        )

        self.scheduler = WorkLogScheduler(
            buffer=self.buffer,
            summarizer=self.summarizer,
            persister=self.persister,
            publisher=self.publisher if publish and publishing.enabled else None,
            interval_seconds=interval_seconds or self.config.schedule.interval_seconds,
        )

    def _require_workspace(self) -> Path:
        if self.workspace_root is None or not self.workspace_root.is_dir():
            logger.error("No workspace folder detected")
            self.notifier.error(MSG_NO_WORKSPACE)
            raise ConfigurationError(
                "Workspace root is missing or not a directory",
                key=str(self.workspace_root) if self.workspace_root else None,
            )
        return self.workspace_root

    def start(self) -> None:
        """Start observing the workspace.

        Raises:
            ConfigurationError: If no workspace root is available. Nothing
                is started in that case.
        """
        root = self._require_workspace()
        logger.info(f"Log file path: {self.log_path}")
        self.persister.ensure_log_file()
        self.watcher.start()
        self.scheduler.start()
        logger.info(f"codetribute is now active for {root}")

    def stop(self) -> None:
        """Stop the watcher and scheduler and release HTTP clients."""
        self.scheduler.stop()
        self.watcher.stop()
        if self.chat_client is not None:
            self.chat_client.close()
        self.github.close()
        logger.info("codetribute is now deactivated")

    def run_cycle(self) -> bool:
        """Run one cycle immediately (same path as a timer tick)."""
        return self.scheduler.run_cycle()

    def publish_now(self) -> bool:
        """Push the current local log without waiting for a cycle."""
        self._require_workspace()
        self.persister.ensure_log_file()
        return self.publisher.publish()

    def create_repository(self) -> bool:
        """Create the private repository that receives the log."""
        return self.publisher.create_repository()
