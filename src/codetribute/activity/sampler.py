"""Bounded text snapshots of workspace files."""

import logging
from pathlib import Path

from codetribute.constants import (
    CONTENT_SAMPLE_LIMIT,
    CONTENT_TRUNCATION_MARKER,
    ENCODING_UTF8,
)

logger = logging.getLogger(__name__)


def sample_content(path: Path, limit: int = CONTENT_SAMPLE_LIMIT) -> str | None:
    """Read a file and return at most ``limit`` characters of it.

    Args:
        path: File to sample.
        limit: Maximum number of characters kept from the file.

    Returns:
        The file text, truncated to ``limit`` characters with a trailing
        ``...`` when it was longer, or None if the file is missing or
        unreadable.
    """
    try:
        if not path.is_file():
            return None
        # One character past the limit is enough to detect truncation
        with path.open(encoding=ENCODING_UTF8, errors="replace") as f:
            content = f.read(limit + 1)
    except (OSError, ValueError) as e:
        logger.debug(f"Error reading file content for {path}: {e}")
        return None

    if len(content) > limit:
        return content[:limit] + CONTENT_TRUNCATION_MARKER
    return content
