"""Work-log rendering and local persistence."""

from codetribute.worklog.formatter import (
    WorkLogBlock,
    build_work_log,
    combine_log_and_summary,
    render_detailed_log,
    render_work_log,
)
from codetribute.worklog.persister import LogPersister

__all__ = [
    "LogPersister",
    "WorkLogBlock",
    "build_work_log",
    "combine_log_and_summary",
    "render_detailed_log",
    "render_work_log",
]
