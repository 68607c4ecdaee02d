"""Append-only local work log."""

import logging
from pathlib import Path

from codetribute.constants import ENCODING_UTF8, LOG_ENTRY_SEPARATOR

logger = logging.getLogger(__name__)


class LogPersister:
    """Append work-log entries to a local text file.

    Existing content is never rewritten. Write failures are logged and
    reported through the return value; they never raise, so a full disk does
    not stop the cycle (the following publish simply pushes what is on disk).
    """

    def __init__(self, log_path: Path):
        self.log_path = log_path

    def ensure_log_file(self) -> bool:
        """Create an empty log file if it does not exist yet.

        Returns:
            True if the file exists after the call.
        """
        try:
            if self.log_path.exists():
                logger.info(f"Log file already exists: {self.log_path}")
                return True
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self.log_path.touch()
            logger.info(f"Log file created: {self.log_path}")
            return True
        except OSError as e:
            logger.error(f"Error creating log file {self.log_path}: {e}")
            return False

    def append(self, entry: str) -> bool:
        """Append one entry followed by a blank line.

        Returns:
            True if the entry was written.
        """
        try:
            # Undecodable file names arrive as lone surrogates
            with open(self.log_path, "a", encoding=ENCODING_UTF8, errors="backslashreplace") as f:
                f.write(f"{entry}{LOG_ENTRY_SEPARATOR}")
        except (OSError, UnicodeError) as e:
            logger.error(f"Error writing to log file {self.log_path}: {e}")
            return False

        logger.info(f"Log file updated: {self.log_path}")
        return True

    def read_bytes(self) -> bytes:
        """Return the full current log content.

        Raises:
            OSError: If the file cannot be read.
        """
        return self.log_path.read_bytes()
