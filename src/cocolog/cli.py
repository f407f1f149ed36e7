"""cocolog CLI — Typer application with parse, log, and init commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from cocolog import __version__
from cocolog.config.schema import OUTPUT_FORMATS, CocoLogConfig
from cocolog.git.models import CocoCommit

app = typer.Typer(
    name="cocolog",
    help="Turn numstat git logs into structured commit records.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
logger = logging.getLogger("cocolog")


def _setup_logging(verbose: bool) -> None:
    """Route package logs through Rich on stderr."""
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(console=console, show_path=False, show_time=False, markup=False)
    )
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _resolve_repo_root() -> Path:
    """Find the git repo root, exit 2 on failure."""
    from cocolog.git.adapter import GitError, get_repo_root

    try:
        return get_repo_root()
    except GitError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _check_format(fmt: Optional[str]) -> None:
    if fmt is not None and fmt not in OUTPUT_FORMATS:
        console.print(f"[bold red]Invalid format:[/bold red] {fmt}")
        raise typer.Exit(code=2)


def _parse(log_text: str) -> List[CocoCommit]:
    from cocolog.git.log_parser import GitLogParser

    parser = GitLogParser(log_text)
    commits = parser.parse()
    if parser.errors:
        console.print(f"[yellow]⚠[/yellow]  {len(parser.errors)} malformed line(s) skipped")
    logger.debug("Parsed %d commit(s)", len(commits))
    return commits


def _emit(commits: List[CocoCommit], cfg: CocoLogConfig, output: Optional[str]) -> None:
    """Render *commits* in the configured format, optionally to a file."""
    from cocolog.output import json_report, terminal, yaml_report

    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            commits,
            show_changes=cfg.output.show_changes,
            show_summary=cfg.output.show_summary,
            console=console,
        )
    elif cfg.output.format == "json":
        report_text = json_report.render(commits)
        print(report_text)
    elif cfg.output.format == "yaml":
        report_text = yaml_report.render(commits)
        print(report_text, end="")

    if output:
        if report_text is None:
            # terminal output is not file-friendly; write JSON instead
            report_text = json_report.render(commits)
        Path(output).write_text(report_text, encoding="utf-8")
        logger.info("Report written to %s", output)


# ── parse ─────────────────────────────────────────────────────────────────────


@app.command()
def parse(
    path: Optional[str] = typer.Argument(None, help="Log file to parse ('-' or omitted: stdin)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Parse a numstat log produced by `git log --pretty="format:[%h] %aN %at %s" --numstat`."""
    _setup_logging(verbose)
    _check_format(format)

    if path is None or path == "-":
        log_text = sys.stdin.read()
    else:
        try:
            log_text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] cannot read {path}: {exc.strerror}")
            raise typer.Exit(code=2) from exc

    cfg = CocoLogConfig()
    if format:
        cfg.output.format = format  # type: ignore[assignment]

    _emit(_parse(log_text), cfg, output)


# ── log ───────────────────────────────────────────────────────────────────────


@app.command()
def log(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .cocolog.toml"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | yaml"),
    max_count: Optional[int] = typer.Option(None, "--max-count", "-n", help="Limit to the newest N commits"),
    since: Optional[str] = typer.Option(None, "--since", help="Only commits newer than this date"),
    all_branches: bool = typer.Option(False, "--all", help="Walk all refs, not just HEAD"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Read the current repository's history and print its commits."""
    from cocolog.config.loader import ConfigError, load_config
    from cocolog.git.adapter import GitError, get_commit_log

    _setup_logging(verbose)
    _check_format(format)
    repo_root = _resolve_repo_root()

    # --- Load config ---
    try:
        cfg = load_config(repo_root, config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    # --- CLI overrides ---
    if format:
        cfg.output.format = format  # type: ignore[assignment]
    if max_count is not None:
        cfg.git.max_count = max_count
    if since:
        cfg.git.since = since
    if all_branches:
        cfg.git.all_branches = True

    logger.debug("Repo root: %s", repo_root)

    # --- Get log ---
    try:
        log_text = get_commit_log(repo_root, cfg.git)
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    _emit(_parse(log_text), cfg, output)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .cocolog.toml in the repo root."""
    from cocolog.config.defaults import DEFAULT_TOML
    from cocolog.config.loader import CONFIG_FILENAME

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
        print(f"cocolog {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """cocolog — Turn numstat git logs into structured commit records."""
