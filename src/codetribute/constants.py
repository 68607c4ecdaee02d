"""Constants for codetribute.

This module centralizes the magic strings and numbers used throughout the
work-log pipeline.

Constants are organized by domain:
- Paths
- Activity sampling
- Work-log rendering
- Summarization
- Publishing
- Scheduling
- Notification messages
"""

from typing import Final

# =============================================================================
# Paths
# =============================================================================

CODETRIBUTE_DIR: Final[str] = ".codetribute"
CONFIG_FILE: Final[str] = ".codetribute/config.yaml"
ENV_FILE: Final[str] = ".env"
GITIGNORE_FILE: Final[str] = ".gitignore"
# Lines that already keep ENV_FILE out of git
ENV_IGNORE_PATTERNS: Final[tuple[str, ...]] = (".env", "/.env", ".env*", "*.env")
ENV_GITIGNORE_COMMENT: Final[str] = "codetribute: cached API keys and tokens"
DEFAULT_LOG_FILE: Final[str] = "log.txt"
ENCODING_UTF8: Final[str] = "utf-8"

# Patterns relative to the workspace root that never produce activity records
DEFAULT_EXCLUDE_PATTERNS: Final[tuple[str, ...]] = (
    ".git/*",
    f"{CODETRIBUTE_DIR}/*",
    ENV_FILE,
)

# =============================================================================
# Activity Sampling
# =============================================================================

CONTENT_SAMPLE_LIMIT: Final[int] = 500
CONTENT_TRUNCATION_MARKER: Final[str] = "..."

# =============================================================================
# Work-log Rendering
# =============================================================================

WORK_LOG_BANNER: Final[str] = "==============================="
WORK_LOG_TIME_FORMAT: Final[str] = "%c"
SUMMARY_SECTION_LABEL: Final[str] = "Summary:"
LOG_ENTRY_SEPARATOR: Final[str] = "\n\n"

# =============================================================================
# Summarization
# =============================================================================

DEFAULT_SUMMARIZATION_BASE_URL: Final[str] = "https://api.groq.com/openai/v1"
DEFAULT_SUMMARIZATION_MODEL: Final[str] = "llama-3.2-3b-preview"
DEFAULT_SUMMARIZATION_API_KEY_ENV: Final[str] = "GROQ_API_KEY"
DEFAULT_SUMMARIZATION_TIMEOUT: Final[float] = 30.0

SUMMARY_FALLBACK_NO_COMPLETION: Final[str] = "Summary could not be generated."
SUMMARY_FALLBACK_ERROR: Final[str] = "Error generating summary."

SUMMARIZATION_PROMPT: Final[str] = (
    "Summarize the following work activities concisely without providing "
    "suggestions, recommendations, or additional information:\n"
    "{detailed_log}"
)

# =============================================================================
# Publishing
# =============================================================================

DEFAULT_GITHUB_API_URL: Final[str] = "https://api.github.com"
DEFAULT_REPO_NAME: Final[str] = "codetribute-repo"
DEFAULT_REMOTE_PATH: Final[str] = "log.txt"
DEFAULT_COMMIT_MESSAGE: Final[str] = "Update log.txt"
DEFAULT_GITHUB_TOKEN_ENV: Final[str] = "GITHUB_TOKEN"
DEFAULT_PUBLISH_TIMEOUT: Final[float] = 30.0

GITHUB_SCOPE_REPO: Final[str] = "repo"
GITHUB_ACCEPT_HEADER: Final[str] = "application/vnd.github.v3+json"
HTTP_STATUS_CREATED: Final[int] = 201
HTTP_STATUS_NOT_FOUND: Final[int] = 404

# =============================================================================
# Scheduling
# =============================================================================

DEFAULT_INTERVAL_MINUTES: Final[int] = 60
SECONDS_PER_MINUTE: Final[int] = 60
WATCHER_STOP_TIMEOUT_SECONDS: Final[float] = 5.0

# =============================================================================
# Logging
# =============================================================================

LOGGER_NAME: Final[str] = "codetribute"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
VALID_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_ROTATION_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_ROTATION_BACKUP_COUNT: Final[int] = 3

# =============================================================================
# Notification Messages
# =============================================================================

MSG_AUTH_FAILED: Final[str] = "GitHub authentication failed!"
MSG_PUBLISH_SUCCESS: Final[str] = "Logs pushed to GitHub successfully!"
MSG_PUBLISH_FAILED: Final[str] = "Error pushing logs to GitHub: {error}"
MSG_REPO_CREATED: Final[str] = "Repository created successfully!"
MSG_REPO_CREATE_FAILED: Final[str] = "Failed to create repository!"
MSG_NO_WORKSPACE: Final[str] = (
    "No workspace folder detected! Please open a workspace folder to use codetribute."
)
MSG_API_KEY_SAVED: Final[str] = "API key saved successfully!"
MSG_API_KEY_REQUIRED: Final[str] = "An API key is required to use summarization features!"
