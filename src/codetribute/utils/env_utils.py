"""Secret caching in the workspace .env file."""

from __future__ import annotations

import os
from pathlib import Path

from codetribute.constants import (
    ENCODING_UTF8,
    ENV_FILE,
    ENV_GITIGNORE_COMMENT,
    ENV_IGNORE_PATTERNS,
    GITIGNORE_FILE,
)


def update_env_file(workspace_root: Path, key: str, value: str) -> Path:
    """Set ``key=value`` in the workspace .env file, creating it if needed.

    The value is also exported to the current process so that clients built
    afterwards see it without reloading .env.

    Args:
        workspace_root: Workspace root directory
        key: Environment variable name
        value: Environment variable value

    Returns:
        Path of the .env file
    """
    env_path = workspace_root / ENV_FILE

    lines: list[str] = []
    replaced = False
    if env_path.exists():
        with env_path.open("r", encoding=ENCODING_UTF8) as f:
            for line in f:
                if line.strip().startswith(f"{key}="):
                    lines.append(f"{key}={value}\n")
                    replaced = True
                else:
                    lines.append(line)

    if not replaced:
        if lines and not lines[-1].endswith("\n"):
            lines.append("\n")
        lines.append(f"{key}={value}\n")

    with env_path.open("w", encoding=ENCODING_UTF8) as f:
        f.writelines(lines)

    os.environ[key] = value
    return env_path


def ensure_env_file_ignored(workspace_root: Path) -> bool:
    """Keep the cached secrets out of version control.

    Appends the .env file to the workspace .gitignore (creating it if needed)
    unless a line already ignores it. Existing content is kept as is.

    Args:
        workspace_root: Workspace root directory

    Returns:
        True if .gitignore was changed
    """
    gitignore_path = workspace_root / GITIGNORE_FILE

    existing_lines: list[str] = []
    if gitignore_path.exists():
        with gitignore_path.open("r", encoding=ENCODING_UTF8) as f:
            existing_lines = f.readlines()

    if any(line.strip() in ENV_IGNORE_PATTERNS for line in existing_lines):
        return False

    if existing_lines:
        if not existing_lines[-1].endswith("\n"):
            existing_lines.append("\n")
        existing_lines.append("\n")
    existing_lines.append(f"# {ENV_GITIGNORE_COMMENT}\n")
    existing_lines.append(f"{ENV_FILE}\n")

    with gitignore_path.open("w", encoding=ENCODING_UTF8) as f:
        f.writelines(existing_lines)
    return True
