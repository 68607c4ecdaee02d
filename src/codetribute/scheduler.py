"""Periodic work-log cycle.

Each tick drains the activity buffer and runs the batch through
format → summarize → persist → publish. Ticks with no buffered activity
do nothing, so no empty entries are ever written.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime
from enum import Enum

from codetribute.activity.buffer import ActivityBuffer
from codetribute.constants import DEFAULT_INTERVAL_MINUTES, SECONDS_PER_MINUTE
from codetribute.publishing.publisher import RemotePublisher
from codetribute.summarization.summarizer import Summarizer
from codetribute.worklog.formatter import (
    build_work_log,
    combine_log_and_summary,
    render_work_log,
)
from codetribute.worklog.persister import LogPersister

logger = logging.getLogger(__name__)


class CycleState(str, Enum):
    """Scheduler states."""

    IDLE = "idle"
    PUBLISHING = "publishing"


class WorkLogScheduler:
    """Run work-log cycles on a fixed interval.

    The timer is re-armed only after a cycle returns, and a lock serializes
    timed cycles with manual ``run_cycle`` calls, so two cycles never
    overlap even when one outlasts the interval.
    """

    def __init__(
        self,
        buffer: ActivityBuffer,
        summarizer: Summarizer,
        persister: LogPersister,
        publisher: RemotePublisher | None = None,
        interval_seconds: float = DEFAULT_INTERVAL_MINUTES * SECONDS_PER_MINUTE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize the scheduler.

        Args:
            buffer: Buffer drained at each tick.
            summarizer: Produces the summary section.
            persister: Appends entries to the local log.
            publisher: Pushes the log remotely (None disables publishing).
            interval_seconds: Seconds between ticks.
            clock: Source of the work-log capture time.
        """
        self.buffer = buffer
        self.summarizer = summarizer
        self.persister = persister
        self.publisher = publisher
        self.interval_seconds = interval_seconds
        self.clock = clock

        self._state = CycleState.IDLE
        self._cycle_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()
        self._running = False

    @property
    def state(self) -> CycleState:
        """Current cycle state."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the timer is armed."""
        return self._running

    def run_cycle(self) -> bool:
        """Execute one cycle.

        Returns:
            True if a batch was processed, False if the buffer was empty.
        """
        with self._cycle_lock:
            batch = self.buffer.drain_all()
            if not batch:
                logger.debug("No file activity since last cycle, skipping")
                return False

            self._state = CycleState.PUBLISHING
            logger.info(f"Updating logs with {len(batch)} activity records")
            try:
                work_log = render_work_log(build_work_log(batch, self.clock()))
                summary = self.summarizer.summarize(batch)
                self.persister.append(combine_log_and_summary(work_log, summary))
                if self.publisher is not None:
                    self.publisher.publish()
            except Exception as e:
                logger.error(f"Work-log cycle failed: {e}", exc_info=True)
            finally:
                self._state = CycleState.IDLE
            return True

    def _arm_timer(self) -> None:
        with self._timer_lock:
            if not self._running:
                return
            self._timer = threading.Timer(self.interval_seconds, self._tick)
            self._timer.daemon = True
            self._timer.start()

    def _tick(self) -> None:
        try:
            self.run_cycle()
        finally:
            self._arm_timer()

    def start(self) -> None:
        """Start periodic cycles."""
        if self._running:
            logger.warning("Scheduler already running")
            return

        self._running = True
        self._arm_timer()
        logger.info(f"Scheduled work-log cycles every {self.interval_seconds:.0f}s")

    def stop(self) -> None:
        """Cancel the pending tick. A cycle already in progress finishes."""
        with self._timer_lock:
            self._running = False
            if self._timer:
                self._timer.cancel()
                self._timer = None
        logger.info("Scheduler stopped")
