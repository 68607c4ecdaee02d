"""Rendering of activity batches into work-log text.

Two renderings exist. The work-log block is the deduplicated,
human-readable entry that gets persisted. The detailed log keeps one line
per event (duplicates included) and is only fed to the summarizer.
"""

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime

from codetribute.activity.models import ActivityAction, ActivityRecord
from codetribute.constants import (
    SUMMARY_SECTION_LABEL,
    WORK_LOG_BANNER,
    WORK_LOG_TIME_FORMAT,
)


@dataclass(frozen=True)
class WorkLogBlock:
    """Deduplicated file names per action for one cycle."""

    created_files: tuple[str, ...]
    modified_files: tuple[str, ...]
    deleted_files: tuple[str, ...]
    generated_at: datetime

    @property
    def formatted_time(self) -> str:
        """Capture time in the locale's date and time representation."""
        return self.generated_at.strftime(WORK_LOG_TIME_FORMAT)


def _unique_names(records: Iterable[ActivityRecord], action: ActivityAction) -> tuple[str, ...]:
    """File names for one action, deduplicated in first-seen order."""
    return tuple(dict.fromkeys(r.file_name for r in records if r.action is action))


def _json_list(names: Sequence[str]) -> str:
    return json.dumps(list(names), ensure_ascii=False, separators=(",", ":"))


def build_work_log(records: Sequence[ActivityRecord], now: datetime | None = None) -> WorkLogBlock:
    """Collapse a batch of activity into a WorkLogBlock.

    Args:
        records: Drained batch, in arrival order.
        now: Capture time (defaults to the current local time).

    Returns:
        WorkLogBlock with one deduplicated name list per action.
    """
    return WorkLogBlock(
        created_files=_unique_names(records, ActivityAction.CREATED),
        modified_files=_unique_names(records, ActivityAction.MODIFIED),
        deleted_files=_unique_names(records, ActivityAction.DELETED),
        generated_at=now or datetime.now(),
    )


def render_work_log(block: WorkLogBlock) -> str:
    """Render a WorkLogBlock between two banner lines."""
    lines = [
        WORK_LOG_BANNER,
        f"Work log generated at {block.formatted_time}:",
        "",
        f"Modified Files: {_json_list(block.modified_files)}",
        f"Created Files: {_json_list(block.created_files)}",
        f"Deleted Files: {_json_list(block.deleted_files)}",
        WORK_LOG_BANNER,
    ]
    return "\n".join(lines)


def render_detailed_log(records: Sequence[ActivityRecord]) -> str:
    """Render one line per event for the summarizer.

    Example:
        CREATED docs/notes.md
        Content: first draft
        MODIFIED src/app.py
    """
    lines = []
    for record in records:
        line = f"{record.action.value.upper()} {record.folder}/{record.file_name}"
        if record.content:
            line += f"\nContent: {record.content}"
        lines.append(line)
    return "\n".join(lines)


def combine_log_and_summary(work_log: str, summary: str) -> str:
    """Join a rendered work log and its summary into one persisted entry."""
    return f"{work_log}\n\n{SUMMARY_SECTION_LABEL}\n{summary}"
