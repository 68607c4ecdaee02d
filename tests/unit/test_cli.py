"""CLI-level tests for codetribute commands."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from codetribute import cli
from codetribute.cli import app
from codetribute.config import CodetributeConfig
from codetribute.constants import CONFIG_FILE, MSG_API_KEY_REQUIRED, MSG_API_KEY_SAVED


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Return a Typer CLI runner."""
    return CliRunner()


@pytest.fixture()
def fake_service(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace service construction with a mock."""
    service = MagicMock()
    monkeypatch.setattr(cli, "_build_service", lambda *args, **kwargs: service)
    return service


def test_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(app, ["version"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "codetribute" in result.stdout


class TestInit:
    """init writes the default configuration once."""

    def test_writes_default_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(app, ["init", "--root", str(tmp_path)], catch_exceptions=False)

        assert result.exit_code == 0, result.output
        assert (tmp_path / CONFIG_FILE).exists()

    def test_refuses_to_overwrite(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        cli_runner.invoke(app, ["init", "--root", str(tmp_path)])

        result = cli_runner.invoke(app, ["init", "--root", str(tmp_path)])

        assert result.exit_code == 1
        assert "already exists" in result.stdout

    def test_force_overwrites(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILE
        config_file.parent.mkdir(parents=True)
        config_file.write_text("schedule:\n  interval_minutes: 5\n")

        result = cli_runner.invoke(app, ["init", "--root", str(tmp_path), "--force"])

        assert result.exit_code == 0
        assert "interval_minutes: 60" in config_file.read_text()


class TestPublishCommands:
    """publish and create-repo map outcomes to exit codes."""

    def test_publish_success(self, cli_runner, tmp_path: Path, fake_service: MagicMock) -> None:
        fake_service.publish_now.return_value = True

        result = cli_runner.invoke(app, ["publish", "--root", str(tmp_path)])

        assert result.exit_code == 0
        fake_service.publish_now.assert_called_once()
        fake_service.stop.assert_called_once()

    def test_publish_failure_exits_nonzero(
        self, cli_runner, tmp_path: Path, fake_service: MagicMock
    ) -> None:
        fake_service.publish_now.return_value = False

        result = cli_runner.invoke(app, ["publish", "--root", str(tmp_path)])

        assert result.exit_code == 1
        fake_service.stop.assert_called_once()

    def test_create_repo(self, cli_runner, tmp_path: Path, fake_service: MagicMock) -> None:
        fake_service.create_repository.return_value = True

        result = cli_runner.invoke(app, ["create-repo", "--root", str(tmp_path)])

        assert result.exit_code == 0
        fake_service.create_repository.assert_called_once()


def test_watch_rejects_missing_root(cli_runner: CliRunner, tmp_path: Path) -> None:
    result = cli_runner.invoke(app, ["watch", "--root", str(tmp_path / "nope")])

    assert result.exit_code == 1


class TestEnsureApiKey:
    """First-run prompt for the summarization key."""

    def test_prompted_key_is_cached(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GROQ_API_KEY", "placeholder")
        monkeypatch.delenv("GROQ_API_KEY")
        monkeypatch.setattr(cli.typer, "prompt", lambda *a, **k: "typed-key")
        notifier = MagicMock()

        cli._ensure_api_key(tmp_path, CodetributeConfig(), notifier)

        assert "GROQ_API_KEY=typed-key" in (tmp_path / ".env").read_text()
        assert ".env" in (tmp_path / ".gitignore").read_text()
        notifier.info.assert_called_once_with(MSG_API_KEY_SAVED)

    def test_empty_answer_reports_requirement(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        monkeypatch.setattr(cli.typer, "prompt", lambda *a, **k: "")
        notifier = MagicMock()

        cli._ensure_api_key(tmp_path, CodetributeConfig(), notifier)

        notifier.error.assert_called_once_with(MSG_API_KEY_REQUIRED)
        assert not (tmp_path / ".env").exists()

    def test_existing_key_skips_prompt(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GROQ_API_KEY", "present")
        prompt = MagicMock()
        monkeypatch.setattr(cli.typer, "prompt", prompt)

        cli._ensure_api_key(tmp_path, CodetributeConfig(), MagicMock())

        prompt.assert_not_called()
