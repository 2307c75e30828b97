"""CLI entry point for DigestAI."""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from digestai.config import DigestConfig, DigestSettings, load_settings
from digestai.config.loader import DEFAULT_SETTINGS_TEMPLATE, SETTINGS_FILENAME
from digestai.errors import DigestCancelledError, DigestWriteError, ProjectNotFoundError
from digestai.output import DigestResult, DigestWriter

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PROJECT_NOT_FOUND = 2
EXIT_WRITE_FAILED = 3
EXIT_CANCELLED = 4

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

app = typer.Typer(
    name="digestai",
    help="Generate a Markdown digest of a codebase for AI assistants.",
)

config_app = typer.Typer(help="Manage DigestAI settings.")
app.add_typer(config_app, name="config")

err_console = Console(stderr=True)

# Global state
_settings: DigestSettings | None = None


def _get_settings() -> DigestSettings:
    if _settings is None:
        return load_settings()
    return _settings


def _configure_logging(level: int) -> None:
    """Route the package's log records to a Rich handler on stderr."""
    pkg_logger = logging.getLogger("digestai")
    for handler in list(pkg_logger.handlers):
        if isinstance(handler, RichHandler):
            pkg_logger.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help=f"Path to {SETTINGS_FILENAME}")
    ] = None,
) -> None:
    """Global options."""
    global _settings
    try:
        _settings = load_settings(config)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILURE)
    _configure_logging(_LOG_LEVELS[_settings.log_level])


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _display_summary(result: DigestResult) -> None:
    """Show skipped files as a Rich table."""
    if not result.skipped:
        return
    table = Table(title=f"Skipped files ({len(result.skipped)})")
    table.add_column("File", style="cyan")
    table.add_column("Reason", style="yellow")
    for path, reason in result.skipped:
        table.add_row(path, reason)
    rprint(table)


@app.command()
def generate(
    path: Annotated[str, typer.Argument(help="Project directory to digest")] = ".",
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", envvar="DIGESTAI_OUTPUT", help="Output file path"),
    ] = None,
    exclude_patterns: Annotated[
        str | None,
        typer.Option("--exclude-patterns", help="Comma-separated file-name patterns to ignore"),
    ] = None,
    include_extensions: Annotated[
        str | None,
        typer.Option("--include-extensions", help="Comma-separated extra extensions to include"),
    ] = None,
    max_file_size_mb: Annotated[
        int | None,
        typer.Option("--max-file-size-mb", help="Skip files larger than this (0 disables)"),
    ] = None,
    tree_mode: Annotated[
        str | None,
        typer.Option("--tree-mode", help="'included' (folders with digested files) or 'all'"),
    ] = None,
    workers: Annotated[
        int | None, typer.Option("--workers", min=1, help="Concurrent file reads")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output")] = False,
) -> None:
    """Scan a project and write its digest."""
    settings = _get_settings()
    if verbose:
        _configure_logging(logging.DEBUG)
    if tree_mode is not None and tree_mode not in ("included", "all"):
        err_console.print(f"[red]Error:[/red] invalid --tree-mode {tree_mode!r}")
        raise typer.Exit(EXIT_FAILURE)

    project = Path(path).expanduser().resolve()
    cfg = DigestConfig.from_settings(
        settings,
        project,
        output_path=output,
        exclude_patterns=_split_csv(exclude_patterns),
        include_extensions=_split_csv(include_extensions),
        max_file_size_mb=max_file_size_mb,
        tree_mode=tree_mode,
        max_workers=workers,
        verbose=verbose,
    )

    def _progress(index: int, total: int, rel: str) -> None:
        if verbose:
            rprint(f"[dim]Processing ({index}/{total}):[/dim] {escape(rel)}")

    rprint(f"[bold]Scanning[/bold] {escape(str(cfg.project_path))}...")
    try:
        result = DigestWriter(cfg, progress=_progress).generate()
    except ProjectNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_PROJECT_NOT_FOUND)
    except DigestWriteError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_WRITE_FAILED)
    except DigestCancelledError as e:
        err_console.print(f"[yellow]{escape(str(e))}[/yellow]")
        raise typer.Exit(EXIT_CANCELLED)
    except Exception as e:
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        err_console.print(escape(traceback.format_exc()))
        raise typer.Exit(EXIT_FAILURE)

    if verbose:
        _display_summary(result)

    if not result.written:
        rprint("[yellow]No relevant files found; no digest written.[/yellow]")
        return

    rprint(
        Panel(
            f"[dim]Files:[/dim]   {len(result.files_included)}\n"
            f"[dim]Skipped:[/dim] {len(result.skipped)}\n"
            f"[dim]Output:[/dim]  {escape(str(result.output_path))}",
            title="Digest generated",
            border_style="green",
        )
    )


@config_app.command("show")
def config_show() -> None:
    """Show current resolved settings."""
    settings = _get_settings()
    rprint(Syntax(yaml.dump(settings.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    directory: Annotated[
        str, typer.Option("--path", help="Directory to create the settings file in")
    ] = ".",
    force: bool = typer.Option(False, "--force", help="Overwrite existing settings"),
) -> None:
    """Create a default digestai.yaml."""
    target = Path(directory) / SETTINGS_FILENAME
    if target.exists() and not force:
        rprint(f"[yellow]{SETTINGS_FILENAME} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(EXIT_FAILURE)
    target.write_text(DEFAULT_SETTINGS_TEMPLATE)
    rprint(f"[green]Created[/green] {escape(str(target))}")


if __name__ == "__main__":
    app()
