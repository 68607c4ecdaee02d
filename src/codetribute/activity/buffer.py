"""In-memory activity buffer shared by the watcher and the scheduler."""

import threading

from codetribute.activity.models import ActivityRecord


class ActivityBuffer:
    """Ordered, append-only store of activity records between cycles.

    Watchdog delivers events on its observer thread while the scheduler
    drains from its timer thread, so both operations hold the same lock.
    ``drain_all`` swaps the backing list out in one step: a record appended
    concurrently lands either in the returned batch or in the next one,
    never both.
    """

    def __init__(self) -> None:
        self._records: list[ActivityRecord] = []
        self._lock = threading.Lock()

    def append(self, record: ActivityRecord) -> None:
        """Append a record to the current batch."""
        with self._lock:
            self._records.append(record)

    def drain_all(self) -> list[ActivityRecord]:
        """Return every buffered record and start an empty batch."""
        with self._lock:
            drained, self._records = self._records, []
        return drained

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def is_empty(self) -> bool:
        """Check whether any activity is waiting for the next cycle."""
        return len(self) == 0
