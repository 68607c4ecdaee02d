"""Activity record types."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ActivityAction(str, Enum):
    """File-system actions observed in the workspace."""

    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"

    @classmethod
    def values(cls) -> list[str]:
        """Return list of all action values."""
        return [a.value for a in cls]


@dataclass(frozen=True)
class ActivityRecord:
    """One observed file-system event.

    Attributes:
        action: What happened to the file.
        folder: Name of the immediate parent directory (not the full path).
        file_name: Base name of the affected file.
        content: Sampled text for created/modified files. Always None for
            deleted files and for files that could not be read.
    """

    action: ActivityAction
    folder: str
    file_name: str
    content: str | None = None

    def __post_init__(self) -> None:
        if self.action is ActivityAction.DELETED and self.content is not None:
            raise ValueError("Deleted activity records cannot carry content")

    @classmethod
    def from_path(
        cls,
        action: ActivityAction,
        path: Path,
        content: str | None = None,
    ) -> "ActivityRecord":
        """Build a record from an absolute file path."""
        return cls(
            action=action,
            folder=path.parent.name,
            file_name=path.name,
            content=content,
        )
