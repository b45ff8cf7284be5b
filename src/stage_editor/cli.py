"""stage-editor CLI — Typer application with run, install, uninstall and init commands."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from stage_editor import __version__

app = typer.Typer(
    name="stage-editor",
    help="Run a command over staged file contents and restage the result.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from stage_editor.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


# ── run ───────────────────────────────────────────────────────────────────────


@app.command()
def run(
    command: Optional[str] = typer.Argument(
        None, help="Shell command to run per file; '{}' is replaced by the file path"
    ),
    pattern: Optional[List[str]] = typer.Option(
        None, "--pattern", "-p", help="Glob, or /regex/ when starting with '/' (repeatable)"
    ),
    write: Optional[bool] = typer.Option(
        None, "--write/--no-write", help="Write changed content back to the index"
    ),
    update_working_tree: Optional[bool] = typer.Option(
        None, "--update-working-tree/--no-update-working-tree",
        help="Patch the working copy after updating the index",
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .stage-editor.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output, including git commands"),
) -> None:
    """Run COMMAND on the staged content of every matching file."""
    from stage_editor.command import CommandError, command_callback
    from stage_editor.config.loader import ConfigError, load_config
    from stage_editor.config.schema import OUTPUT_FORMATS
    from stage_editor.editor import GitStagedFileEditor, StageEditorError
    from stage_editor.filters import PatternError
    from stage_editor.git.adapter import GitError
    from stage_editor.git.diff_parser import DiffFormatError
    from stage_editor.output import json_report, terminal
    from stage_editor.output.models import EditResult

    _configure_logging(verbose, debug)
    repo_root = _resolve_repo_root()

    # --- Load config ---
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if command:
        cfg.command.run = command
    if pattern:
        cfg.editor.patterns = list(pattern)
    if write is not None:
        cfg.editor.write = write
    if update_working_tree is not None:
        cfg.editor.update_working_tree = update_working_tree
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]

    if not cfg.command.run:
        console.print(
            "[bold red]Error:[/bold red] no command given "
            "(pass one or set [command].run in .stage-editor.toml)"
        )
        raise typer.Exit(code=2)

    # --- Edit the index ---
    start = time.perf_counter()
    try:
        editor = GitStagedFileEditor(repo_root)
        updated = editor.execute(
            command_callback(cfg.command.run, cwd=repo_root),
            cfg.editor.patterns,
            write=cfg.editor.write,
            update_working_tree=cfg.editor.update_working_tree,
        )
    except CommandError as exc:
        console.print(f"[bold red]Command failed:[/bold red] {exc}")
        if exc.stderr:
            console.print(exc.stderr, markup=False, highlight=False)
        raise typer.Exit(code=1) from exc
    except PatternError as exc:
        console.print(f"[bold red]Pattern error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except (GitError, DiffFormatError) as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    except StageEditorError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    result = EditResult(
        updated_files=updated,
        command=cfg.command.run,
        patterns=list(cfg.editor.patterns),
        write=cfg.editor.write,
        update_working_tree=cfg.editor.update_working_tree,
        duration_ms=(time.perf_counter() - start) * 1000,
    )

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(result))
    else:
        terminal.render(result, show_summary=cfg.output.show_summary, console=console)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    force: bool = typer.Option(False, "--force", help="Overwrite existing pre-commit hook"),
) -> None:
    """Install stage-editor as a git pre-commit hook."""
    from stage_editor.hooks.installer import install_hook

    repo_root = _resolve_repo_root()
    success, msg = install_hook(repo_root, force=force)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── uninstall ─────────────────────────────────────────────────────────────────


@app.command()
def uninstall() -> None:
    """Remove the stage-editor pre-commit hook."""
    from stage_editor.hooks.installer import uninstall_hook

    repo_root = _resolve_repo_root()
    success, msg = uninstall_hook(repo_root)
    if success:
        console.print(f"[green]✓[/green] {msg}")
    else:
        console.print(f"[red]✗[/red] {msg}")
        raise typer.Exit(code=1)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .stage-editor.toml in the repo root."""
    from stage_editor.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    repo_root = _resolve_repo_root()
    config_path = repo_root / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"stage-editor {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """stage-editor — edit staged files without touching the working tree."""
