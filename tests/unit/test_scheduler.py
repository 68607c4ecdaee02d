"""Tests for WorkLogScheduler cycles and timer lifecycle."""

import os
import threading
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from codetribute.activity.buffer import ActivityBuffer
from codetribute.activity.models import ActivityAction, ActivityRecord
from codetribute.scheduler import CycleState, WorkLogScheduler
from codetribute.worklog.persister import LogPersister

FIXED_TIME = datetime(2026, 10, 19, 9, 0, 0)


@pytest.fixture
def buffer() -> ActivityBuffer:
    return ActivityBuffer()


@pytest.fixture
def summarizer() -> MagicMock:
    mock = MagicMock()
    mock.summarize.return_value = "Worked on notes."
    return mock


@pytest.fixture
def persister(tmp_path: Path) -> LogPersister:
    persister = LogPersister(tmp_path / "log.txt")
    persister.ensure_log_file()
    return persister


@pytest.fixture
def publisher() -> MagicMock:
    return MagicMock()


@pytest.fixture
def scheduler(buffer, summarizer, persister, publisher) -> WorkLogScheduler:
    return WorkLogScheduler(
        buffer=buffer,
        summarizer=summarizer,
        persister=persister,
        publisher=publisher,
        interval_seconds=3600,
        clock=lambda: FIXED_TIME,
    )


class TestRunCycle:
    """One cycle: drain, format, summarize, persist, publish."""

    def test_empty_buffer_skips_everything(
        self, scheduler, summarizer, publisher, persister
    ) -> None:
        persister_spy = MagicMock(wraps=persister)
        scheduler.persister = persister_spy

        assert scheduler.run_cycle() is False

        summarizer.summarize.assert_not_called()
        persister_spy.append.assert_not_called()
        publisher.publish.assert_not_called()
        assert persister.log_path.read_text() == ""
        assert scheduler.state is CycleState.IDLE

    def test_cycle_writes_block_and_publishes(
        self, scheduler, buffer, summarizer, publisher, persister
    ) -> None:
        record = ActivityRecord(ActivityAction.CREATED, "docs", "notes.md", "0123456789")
        buffer.append(record)

        assert scheduler.run_cycle() is True

        summarizer.summarize.assert_called_once_with([record])
        publisher.publish.assert_called_once()
        text = persister.log_path.read_text()
        assert 'Created Files: ["notes.md"]' in text
        assert text.endswith("Summary:\nWorked on notes.\n\n")
        assert buffer.is_empty()

    def test_state_is_publishing_during_cycle(self, scheduler, buffer, summarizer) -> None:
        seen: list[CycleState] = []
        summarizer.summarize.side_effect = lambda batch: seen.append(scheduler.state) or "s"
        buffer.append(ActivityRecord(ActivityAction.MODIFIED, "src", "a.py"))

        scheduler.run_cycle()

        assert seen == [CycleState.PUBLISHING]
        assert scheduler.state is CycleState.IDLE

    def test_events_during_cycle_go_to_next_batch(self, scheduler, buffer, summarizer) -> None:
        late = ActivityRecord(ActivityAction.MODIFIED, "src", "late.py")

        def summarize(batch):
            buffer.append(late)
            return "s"

        summarizer.summarize.side_effect = summarize
        buffer.append(ActivityRecord(ActivityAction.MODIFIED, "src", "early.py"))

        scheduler.run_cycle()

        assert buffer.drain_all() == [late]

    def test_publish_failure_does_not_break_next_cycle(
        self, scheduler, buffer, publisher
    ) -> None:
        publisher.publish.side_effect = RuntimeError("boom")
        buffer.append(ActivityRecord(ActivityAction.MODIFIED, "src", "a.py"))

        assert scheduler.run_cycle() is True
        assert scheduler.state is CycleState.IDLE

        publisher.publish.side_effect = None
        buffer.append(ActivityRecord(ActivityAction.MODIFIED, "src", "b.py"))
        assert scheduler.run_cycle() is True
        assert publisher.publish.call_count == 2

    def test_undecodable_file_name_is_persisted_and_published(
        self, scheduler, buffer, publisher, persister
    ) -> None:
        name = os.fsdecode(b"bad\xff.txt")
        buffer.append(ActivityRecord(ActivityAction.CREATED, "src", name))

        assert scheduler.run_cycle() is True

        assert "bad\\udcff.txt" in persister.log_path.read_text(encoding="utf-8")
        publisher.publish.assert_called_once()

    def test_no_publisher_only_persists(self, buffer, summarizer, persister) -> None:
        scheduler = WorkLogScheduler(buffer, summarizer, persister, publisher=None)
        buffer.append(ActivityRecord(ActivityAction.DELETED, "src", "gone.py"))

        assert scheduler.run_cycle() is True
        assert 'Deleted Files: ["gone.py"]' in persister.log_path.read_text()


class TestTimer:
    """start/stop lifecycle."""

    def test_tick_runs_cycle_and_rearms(self, buffer, summarizer, persister, publisher) -> None:
        ticked = threading.Event()
        publisher.publish.side_effect = lambda: ticked.set()
        scheduler = WorkLogScheduler(
            buffer, summarizer, persister, publisher, interval_seconds=0.05
        )
        buffer.append(ActivityRecord(ActivityAction.MODIFIED, "src", "a.py"))

        scheduler.start()
        try:
            assert ticked.wait(timeout=5)
        finally:
            scheduler.stop()

        assert not scheduler.is_running
        publisher.publish.assert_called_once()

    def test_stop_before_tick_cancels(self, scheduler, buffer, summarizer) -> None:
        buffer.append(ActivityRecord(ActivityAction.MODIFIED, "src", "a.py"))

        scheduler.start()
        assert scheduler.is_running
        scheduler.stop()

        summarizer.summarize.assert_not_called()
        assert len(buffer) == 1
