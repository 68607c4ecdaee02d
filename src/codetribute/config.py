"""Configuration for codetribute.

Settings live in .codetribute/config.yaml under the workspace root. Every
section is optional; missing keys fall back to the defaults in constants.py.

Example:
    summarization:
      model: llama-3.2-3b-preview
      api_key: ${GROQ_API_KEY}
    publishing:
      repo_name: codetribute-repo
    schedule:
      interval_minutes: 60
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from codetribute.constants import (
    CONFIG_FILE,
    CONTENT_SAMPLE_LIMIT,
    DEFAULT_COMMIT_MESSAGE,
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_GITHUB_API_URL,
    DEFAULT_GITHUB_TOKEN_ENV,
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PUBLISH_TIMEOUT,
    DEFAULT_REMOTE_PATH,
    DEFAULT_REPO_NAME,
    DEFAULT_SUMMARIZATION_API_KEY_ENV,
    DEFAULT_SUMMARIZATION_BASE_URL,
    DEFAULT_SUMMARIZATION_MODEL,
    DEFAULT_SUMMARIZATION_TIMEOUT,
    ENCODING_UTF8,
    SECONDS_PER_MINUTE,
    VALID_LOG_LEVELS,
)
from codetribute.exceptions import ValidationError

logger = logging.getLogger(__name__)

_URL_PATTERN = re.compile(r"^https?://" r"[a-zA-Z0-9.-]+" r"(:\d+)?" r"(/.*)?$", re.IGNORECASE)


def _is_valid_url(url: str) -> bool:
    """Check if URL is valid HTTP(S) URL."""
    return bool(url) and bool(_URL_PATTERN.match(url))


def _require_bool(value: Any, field_name: str) -> None:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be true or false",
            field=field_name,
            value=value,
            expected="boolean",
        )


def _require_number(value: Any, field_name: str, integer: bool = False) -> None:
    expected_types: tuple[type, ...] = (int,) if integer else (int, float)
    # bool is an int subclass but never a valid count or duration
    if isinstance(value, bool) or not isinstance(value, expected_types):
        raise ValidationError(
            f"{field_name} must be a number",
            field=field_name,
            value=value,
            expected="integer" if integer else "number",
        )


def _require_str(value: Any, field_name: str, optional: bool = False) -> None:
    if optional and value is None:
        return
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string",
            field=field_name,
            value=value,
            expected="string or null" if optional else "string",
        )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, treating a missing or empty one as {}."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValidationError(
            f"Section '{name}' must be a mapping",
            field=name,
            value=section,
            expected="mapping of settings",
        )
    return section


def _resolve_env_reference(value: str | None) -> str | None:
    """Expand a ``${ENV_VAR}`` reference, leaving plain values untouched."""
    if value and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1])
    return value


@dataclass
class SummarizationConfig:
    """Configuration for LLM summarization of work logs.

    Attributes:
        enabled: Whether to call the LLM at all.
        base_url: OpenAI-compatible API base URL.
        model: Chat model identifier.
        api_key: API key (supports ${ENV_VAR} syntax).
        api_key_env: Environment variable consulted when api_key is unset.
        timeout: Request timeout in seconds.
    """

    enabled: bool = True
    base_url: str = DEFAULT_SUMMARIZATION_BASE_URL
    model: str = DEFAULT_SUMMARIZATION_MODEL
    api_key: str | None = None
    api_key_env: str = DEFAULT_SUMMARIZATION_API_KEY_ENV
    timeout: float = DEFAULT_SUMMARIZATION_TIMEOUT

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValidationError: If any configuration value is invalid.
        """
        _require_bool(self.enabled, "enabled")
        _require_str(self.base_url, "base_url")
        _require_str(self.model, "model")
        _require_str(self.api_key, "api_key", optional=True)
        _require_str(self.api_key_env, "api_key_env")
        _require_number(self.timeout, "timeout")

        if not self.model.strip():
            raise ValidationError(
                "Model name cannot be empty",
                field="model",
                value=self.model,
                expected="non-empty string",
            )

        if not _is_valid_url(self.base_url):
            raise ValidationError(
                f"Invalid base URL: {self.base_url}",
                field="base_url",
                value=self.base_url,
                expected="valid HTTP(S) URL",
            )

        if self.timeout <= 0:
            raise ValidationError(
                "Timeout must be positive",
                field="timeout",
                value=self.timeout,
                expected="positive number",
            )

        if self.api_key and not self.api_key.startswith("${"):
            logger.warning(
                "API key appears to be hardcoded in config. "
                "For security, use ${ENV_VAR_NAME} syntax instead."
            )

    def resolve_api_key(self) -> str | None:
        """Return the effective API key, consulting the environment."""
        return _resolve_env_reference(self.api_key) or os.environ.get(self.api_key_env) or None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummarizationConfig":
        """Create config from dictionary."""
        return cls(
            enabled=data.get("enabled", True),
            base_url=data.get("base_url", DEFAULT_SUMMARIZATION_BASE_URL),
            model=data.get("model", DEFAULT_SUMMARIZATION_MODEL),
            api_key=data.get("api_key"),
            api_key_env=data.get("api_key_env", DEFAULT_SUMMARIZATION_API_KEY_ENV),
            timeout=data.get("timeout", DEFAULT_SUMMARIZATION_TIMEOUT),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "enabled": self.enabled,
            "base_url": self.base_url,
            "model": self.model,
            "api_key": self.api_key,
            "api_key_env": self.api_key_env,
            "timeout": self.timeout,
        }


@dataclass
class PublishingConfig:
    """Configuration for pushing the log file to a GitHub repository.

    Attributes:
        enabled: Whether each cycle ends with a remote publish.
        api_url: GitHub REST API base URL.
        repo_name: Repository that receives the log.
        remote_path: Path of the log file inside the repository.
        account: Account owning the repository (looked up from the token if unset).
        token_env: Environment variable holding the GitHub token.
        commit_message: Commit message for each upsert.
        timeout: Request timeout in seconds.
    """

    enabled: bool = True
    api_url: str = DEFAULT_GITHUB_API_URL
    repo_name: str = DEFAULT_REPO_NAME
    remote_path: str = DEFAULT_REMOTE_PATH
    account: str | None = None
    token_env: str = DEFAULT_GITHUB_TOKEN_ENV
    commit_message: str = DEFAULT_COMMIT_MESSAGE
    timeout: float = DEFAULT_PUBLISH_TIMEOUT

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        _require_bool(self.enabled, "enabled")
        for name in ("api_url", "repo_name", "remote_path", "token_env", "commit_message"):
            _require_str(getattr(self, name), name)
        _require_str(self.account, "account", optional=True)
        _require_number(self.timeout, "timeout")

        if not _is_valid_url(self.api_url):
            raise ValidationError(
                f"Invalid API URL: {self.api_url}",
                field="api_url",
                value=self.api_url,
                expected="valid HTTP(S) URL",
            )
        if not self.repo_name or "/" in self.repo_name:
            raise ValidationError(
                "Repository name must be a bare name",
                field="repo_name",
                value=self.repo_name,
                expected="non-empty name without '/'",
            )
        if not self.remote_path or self.remote_path.startswith("/"):
            raise ValidationError(
                "Remote path must be relative to the repository root",
                field="remote_path",
                value=self.remote_path,
                expected="relative path such as log.txt",
            )
        if self.timeout <= 0:
            raise ValidationError(
                "Timeout must be positive",
                field="timeout",
                value=self.timeout,
                expected="positive number",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PublishingConfig":
        """Create config from dictionary."""
        return cls(
            enabled=data.get("enabled", True),
            api_url=data.get("api_url", DEFAULT_GITHUB_API_URL),
            repo_name=data.get("repo_name", DEFAULT_REPO_NAME),
            remote_path=data.get("remote_path", DEFAULT_REMOTE_PATH),
            account=data.get("account"),
            token_env=data.get("token_env", DEFAULT_GITHUB_TOKEN_ENV),
            commit_message=data.get("commit_message", DEFAULT_COMMIT_MESSAGE),
            timeout=data.get("timeout", DEFAULT_PUBLISH_TIMEOUT),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "enabled": self.enabled,
            "api_url": self.api_url,
            "repo_name": self.repo_name,
            "remote_path": self.remote_path,
            "account": self.account,
            "token_env": self.token_env,
            "commit_message": self.commit_message,
            "timeout": self.timeout,
        }


@dataclass
class WatcherConfig:
    """Configuration for the workspace file watcher.

    Attributes:
        exclude_patterns: fnmatch patterns (relative to the workspace root)
            whose events are ignored.
        content_limit: Maximum number of characters sampled per file.
    """

    exclude_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    content_limit: int = CONTENT_SAMPLE_LIMIT

    def __post_init__(self) -> None:
        patterns = self.exclude_patterns
        if not isinstance(patterns, (list, tuple)) or not all(
            isinstance(p, str) for p in patterns
        ):
            raise ValidationError(
                "Exclude patterns must be a list of strings",
                field="exclude_patterns",
                value=patterns,
                expected="list of fnmatch patterns",
            )
        self.exclude_patterns = list(patterns)

        _require_number(self.content_limit, "content_limit", integer=True)
        if self.content_limit <= 0:
            raise ValidationError(
                "Content limit must be positive",
                field="content_limit",
                value=self.content_limit,
                expected="positive integer",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WatcherConfig":
        """Create config from dictionary."""
        return cls(
            exclude_patterns=data.get("exclude_patterns", DEFAULT_EXCLUDE_PATTERNS),
            content_limit=data.get("content_limit", CONTENT_SAMPLE_LIMIT),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "exclude_patterns": list(self.exclude_patterns),
            "content_limit": self.content_limit,
        }


@dataclass
class ScheduleConfig:
    """Configuration for the periodic publish cycle."""

    interval_minutes: float = DEFAULT_INTERVAL_MINUTES

    def __post_init__(self) -> None:
        _require_number(self.interval_minutes, "interval_minutes")
        if self.interval_minutes <= 0:
            raise ValidationError(
                "Interval must be positive",
                field="interval_minutes",
                value=self.interval_minutes,
                expected="positive number of minutes",
            )

    @property
    def interval_seconds(self) -> float:
        """Interval between cycles in seconds."""
        return self.interval_minutes * SECONDS_PER_MINUTE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleConfig":
        """Create config from dictionary."""
        return cls(interval_minutes=data.get("interval_minutes", DEFAULT_INTERVAL_MINUTES))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"interval_minutes": self.interval_minutes}


@dataclass
class LogConfig:
    """Configuration for the local work log and diagnostic logging.

    Attributes:
        log_file: Work-log path, relative to the workspace root.
        log_level: Diagnostic log level (DEBUG, INFO, WARNING, ERROR).
        diagnostic_file: Optional path for diagnostic logs (stderr if unset).
    """

    log_file: str = DEFAULT_LOG_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    diagnostic_file: str | None = None

    def __post_init__(self) -> None:
        _require_str(self.log_file, "log_file")
        _require_str(self.log_level, "log_level")
        _require_str(self.diagnostic_file, "diagnostic_file", optional=True)
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {self.log_level}",
                field="log_level",
                value=self.log_level,
                expected=f"one of {VALID_LOG_LEVELS}",
            )
        if not self.log_file:
            raise ValidationError(
                "Log file path cannot be empty",
                field="log_file",
                expected="path relative to the workspace root",
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LogConfig":
        """Create config from dictionary."""
        return cls(
            log_file=data.get("log_file", DEFAULT_LOG_FILE),
            log_level=data.get("log_level", DEFAULT_LOG_LEVEL),
            diagnostic_file=data.get("diagnostic_file"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "log_file": self.log_file,
            "log_level": self.log_level,
            "diagnostic_file": self.diagnostic_file,
        }


@dataclass
class CodetributeConfig:
    """Top-level codetribute configuration."""

    summarization: SummarizationConfig = field(default_factory=SummarizationConfig)
    publishing: PublishingConfig = field(default_factory=PublishingConfig)
    watcher: WatcherConfig = field(default_factory=WatcherConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    log: LogConfig = field(default_factory=LogConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CodetributeConfig":
        """Create config from dictionary."""
        if not isinstance(data, dict):
            raise ValidationError(
                "Configuration must be a mapping of sections",
                field="<root>",
                value=data,
                expected="mapping",
            )
        return cls(
            summarization=SummarizationConfig.from_dict(_section(data, "summarization")),
            publishing=PublishingConfig.from_dict(_section(data, "publishing")),
            watcher=WatcherConfig.from_dict(_section(data, "watcher")),
            schedule=ScheduleConfig.from_dict(_section(data, "schedule")),
            log=LogConfig.from_dict(_section(data, "log")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "summarization": self.summarization.to_dict(),
            "publishing": self.publishing.to_dict(),
            "watcher": self.watcher.to_dict(),
            "schedule": self.schedule.to_dict(),
            "log": self.log.to_dict(),
        }

    def get_log_path(self, workspace_root: Path) -> Path:
        """Resolve the local work-log path against the workspace root."""
        return workspace_root / self.log.log_file


def load_config(workspace_root: Path) -> CodetributeConfig:
    """Load configuration from the workspace.

    Args:
        workspace_root: Workspace root directory.

    Returns:
        CodetributeConfig with settings (defaults if not configured).

    Note:
        Returns defaults on error rather than raising, so that the
        watcher can start even with an invalid config file.
    """
    config_file = workspace_root / CONFIG_FILE

    if not config_file.exists():
        logger.debug(f"No config file at {config_file}, using defaults")
        return CodetributeConfig()

    try:
        with open(config_file, encoding=ENCODING_UTF8) as f:
            data = yaml.safe_load(f) or {}
        config = CodetributeConfig.from_dict(data)
        logger.debug(
            f"Loaded config: model={config.summarization.model}, "
            f"repo={config.publishing.repo_name}, "
            f"interval={config.schedule.interval_minutes}m"
        )
        return config

    except ValidationError as e:
        logger.warning(f"Invalid config in {config_file}: {e}")
        logger.info("Using default configuration")
        return CodetributeConfig()

    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse config YAML from {config_file}: {e}")
        return CodetributeConfig()

    except OSError as e:
        logger.warning(f"Failed to read config from {config_file}: {e}")
        return CodetributeConfig()


def save_config(workspace_root: Path, config: CodetributeConfig) -> Path:
    """Write configuration to .codetribute/config.yaml.

    Args:
        workspace_root: Workspace root directory.
        config: Configuration to persist.

    Returns:
        Path of the written config file.
    """
    config_file = workspace_root / CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w", encoding=ENCODING_UTF8) as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    return config_file
