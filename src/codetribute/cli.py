"""Main CLI entry point for codetribute."""

import threading
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from codetribute import __version__
from codetribute.config import CodetributeConfig, load_config, save_config
from codetribute.constants import (
    CONFIG_FILE,
    ENV_FILE,
    MSG_API_KEY_REQUIRED,
    MSG_API_KEY_SAVED,
    SECONDS_PER_MINUTE,
)
from codetribute.exceptions import ConfigurationError
from codetribute.logging_config import configure_logging
from codetribute.notifications import ConsoleNotifier, Notifier
from codetribute.publishing.auth import TokenAuthProvider
from codetribute.publishing.github import GitHubClient
from codetribute.service import WorkLogService
from codetribute.utils import ensure_env_file_ignored, update_env_file

app = typer.Typer(
    name="codetribute",
    help="Turn workspace file activity into a summarized work log on GitHub.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

ROOT_OPTION = typer.Option(
    None,
    "--root",
    "-r",
    help="Workspace root to observe (defaults to the current directory)",
)


def _resolve_root(root: Path | None) -> Path:
    workspace_root = (root or Path.cwd()).resolve()
    load_dotenv(workspace_root / ENV_FILE, verbose=False)
    return workspace_root


def _setup(workspace_root: Path) -> CodetributeConfig:
    config = load_config(workspace_root)
    diagnostic_file = (
        workspace_root / config.log.diagnostic_file if config.log.diagnostic_file else None
    )
    configure_logging(config.log.log_level, diagnostic_file)
    return config


def _cache_secret(workspace_root: Path, key: str, value: str) -> None:
    update_env_file(workspace_root, key, value)
    ensure_env_file_ignored(workspace_root)


def _ensure_api_key(workspace_root: Path, config: CodetributeConfig, notifier: Notifier) -> None:
    """Prompt once for the summarization API key and cache it in .env."""
    summarization = config.summarization
    if not summarization.enabled or summarization.resolve_api_key():
        return

    api_key = typer.prompt(
        "Please enter your API key to use summarization features",
        default="",
        show_default=False,
        hide_input=True,
    )
    if not api_key:
        notifier.error(MSG_API_KEY_REQUIRED)
        return

    _cache_secret(workspace_root, summarization.api_key_env, api_key)
    notifier.info(MSG_API_KEY_SAVED)


def _build_service(
    workspace_root: Path,
    config: CodetributeConfig,
    notifier: Notifier,
    publish: bool = True,
    interval_seconds: float | None = None,
) -> WorkLogService:
    publishing = config.publishing

    def prompt_token() -> str | None:
        token = typer.prompt(
            f"GitHub token ({publishing.token_env} is not set)",
            default="",
            show_default=False,
            hide_input=True,
        )
        if token:
            _cache_secret(workspace_root, publishing.token_env, token)
        return token or None

    github = GitHubClient(api_url=publishing.api_url, timeout=publishing.timeout)
    auth = TokenAuthProvider(
        github,
        token_env=publishing.token_env,
        account=publishing.account,
        prompt=prompt_token,
    )
    return WorkLogService(
        workspace_root,
        config=config,
        notifier=notifier,
        github=github,
        auth=auth,
        publish=publish,
        interval_seconds=interval_seconds,
    )


@app.command("watch")
def watch(
    root: Path | None = ROOT_OPTION,
    interval: float | None = typer.Option(
        None,
        "--interval",
        "-i",
        min=0.1,
        help="Minutes between work-log cycles (overrides config)",
    ),
    no_publish: bool = typer.Option(
        False,
        "--no-publish",
        help="Only write the local log; never push to GitHub",
    ),
) -> None:
    """Observe the workspace and publish a work log every interval.

    Runs until interrupted with Ctrl-C.
    """
    workspace_root = _resolve_root(root)
    notifier = ConsoleNotifier()
    if not workspace_root.is_dir():
        notifier.error(f"Workspace root {workspace_root} is not a directory")
        raise typer.Exit(code=1)

    config = _setup(workspace_root)
    _ensure_api_key(workspace_root, config, notifier)

    service = _build_service(
        workspace_root,
        config,
        notifier,
        publish=not no_publish,
        interval_seconds=interval * SECONDS_PER_MINUTE if interval else None,
    )
    try:
        service.start()
    except ConfigurationError as e:
        raise typer.Exit(code=1) from e

    console.print(
        f"[cyan]Watching[/cyan] {workspace_root} "
        f"[dim](every {service.scheduler.interval_seconds / SECONDS_PER_MINUTE:g} min, "
        f"Ctrl-C to stop)[/dim]"
    )
    stop_event = threading.Event()
    try:
        while not stop_event.wait(1.0):
            pass
    except KeyboardInterrupt:
        console.print("\n[dim]Stopping...[/dim]")
    finally:
        service.stop()


@app.command("publish")
def publish(root: Path | None = ROOT_OPTION) -> None:
    """Push the current local log file to GitHub once."""
    workspace_root = _resolve_root(root)
    notifier = ConsoleNotifier()
    config = _setup(workspace_root)
    service = _build_service(workspace_root, config, notifier)
    try:
        published = service.publish_now()
    except ConfigurationError as e:
        raise typer.Exit(code=1) from e
    finally:
        service.stop()
    if not published:
        raise typer.Exit(code=1)


@app.command("create-repo")
def create_repo(root: Path | None = ROOT_OPTION) -> None:
    """Create the private GitHub repository that receives the log."""
    workspace_root = _resolve_root(root)
    notifier = ConsoleNotifier()
    config = _setup(workspace_root)
    service = _build_service(workspace_root, config, notifier)
    try:
        created = service.create_repository()
    finally:
        service.stop()
    if not created:
        raise typer.Exit(code=1)


@app.command("init")
def init(
    root: Path | None = ROOT_OPTION,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing configuration file",
    ),
) -> None:
    """Write a default configuration file to the workspace."""
    workspace_root = _resolve_root(root)
    config_path = workspace_root / CONFIG_FILE
    if config_path.exists() and not force:
        console.print(f"[yellow]{CONFIG_FILE} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(code=1)

    written = save_config(workspace_root, CodetributeConfig())
    console.print(f"[green]✓[/green] Wrote {written}")


@app.command("version")
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold cyan]codetribute[/bold cyan] version [green]{__version__}[/green]",
            title="Version",
            style="cyan",
        )
    )


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
