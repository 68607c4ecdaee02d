"""Workspace activity capture.

The watcher turns file-system notifications into ActivityRecord values and
appends them to an ActivityBuffer, which the scheduler drains once per cycle.
"""

from codetribute.activity.buffer import ActivityBuffer
from codetribute.activity.models import ActivityAction, ActivityRecord
from codetribute.activity.sampler import sample_content
from codetribute.activity.watcher import ActivityWatcher

__all__ = [
    "ActivityAction",
    "ActivityBuffer",
    "ActivityRecord",
    "ActivityWatcher",
    "sample_content",
]
