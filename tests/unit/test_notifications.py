"""Tests for console notifications."""

import io

from rich.console import Console

from codetribute.constants import MSG_PUBLISH_FAILED
from codetribute.notifications import ConsoleNotifier


def _notifier() -> tuple[ConsoleNotifier, io.StringIO]:
    output = io.StringIO()
    console = Console(file=output, width=200, color_system=None, force_terminal=False)
    return ConsoleNotifier(console), output


def test_info_prints_check_mark() -> None:
    notifier, output = _notifier()

    notifier.info("Logs pushed to GitHub successfully!")

    assert output.getvalue() == "✓ Logs pushed to GitHub successfully!\n"


def test_error_text_with_brackets_is_printed_verbatim() -> None:
    notifier, output = _notifier()
    message = MSG_PUBLISH_FAILED.format(error="unexpected [/x] in [bold]response[/bold]")

    notifier.error(message)

    assert output.getvalue() == f"✗ {message}\n"
