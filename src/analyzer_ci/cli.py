"""Typer-based CLI for analyzer_ci."""

from __future__ import annotations

import os
import sys
import tomllib
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .backends import AnalysisLoadError
from .listener import StreamListener
from .state import AppState, build_state
from .step import StepInputs
from .validation import Verdict

app = typer.Typer(add_completion=False)
console = Console()


def _read_document(path: Path, label: str) -> str:
    if not path.exists():
        raise typer.BadParameter(f"{label} file does not exist: {path}")
    return path.read_text(encoding="utf-8")


def _load_state(config_path: Optional[Path], analysis: Optional[str] = None) -> AppState:
    try:
        return build_state(config_path, analysis_target=analysis)
    except AnalysisLoadError as exc:
        raise typer.BadParameter(str(exc), param_hint="--analysis or dispatch.analysis") from exc
    except (ValidationError, tomllib.TOMLDecodeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config or ANALYZER_CI_* environment") from exc


@app.command("run")
def run_step(
    analyzer_config: Path = typer.Option(..., "--analyzer-config", help="Analyzer config JSON file"),
    coordinator_config: Path = typer.Option(..., "--coordinator-config", help="Coordinator config JSON file"),
    github_owner: str = typer.Option(..., "--github-owner", help="Repository owner"),
    github_repo: str = typer.Option(..., "--github-repo", help="Repository name"),
    github_issue_number: str = typer.Option(..., "--github-issue-number", help="Issue receiving the results"),
    github_base_url: Optional[str] = typer.Option(None, "--github-base-url", help="GitHub API base URL"),
    github_token: Optional[str] = typer.Option(None, "--github-token", help="GitHub token (default: $GITHUB_TOKEN)"),
    workspace: Path = typer.Option(Path("."), "--workspace", help="Root of the source tree"),
    include: Optional[str] = typer.Option(None, "--include", help="Glob selecting files to analyze"),
    background: Optional[bool] = typer.Option(
        None, "--background/--foreground", help="Return before the analysis finishes"
    ),
    analysis: Optional[str] = typer.Option(None, "--analysis", help="Analysis entry point as module:attribute"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
) -> None:
    """Validate, compose and dispatch one analysis. Always exits 0."""

    state = _load_state(config_path, analysis)
    settings = state.config

    token = github_token or os.getenv(settings.github.token_env, "")
    inputs = StepInputs(
        github_base_url=github_base_url or settings.github.base_url,
        github_owner=github_owner,
        github_repo=github_repo,
        github_issue_number=github_issue_number,
        github_token=token,
        analyzer_config=_read_document(analyzer_config, "Analyzer config"),
        coordinator_config=_read_document(coordinator_config, "Coordinator config"),
        run_on_background=settings.dispatch.run_on_background if background is None else background,
        source_include=include,
    )

    step = state.build_step(inputs)
    step.perform(workspace, StreamListener(sys.stdout))


@app.command("check")
def check_fields(
    analyzer_config: Optional[Path] = typer.Option(None, "--analyzer-config", help="Analyzer config JSON file"),
    coordinator_config: Optional[Path] = typer.Option(None, "--coordinator-config", help="Coordinator config JSON file"),
    github_issue_number: Optional[str] = typer.Option(None, "--github-issue-number", help="Issue number to check"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
) -> None:
    """Check individual step fields and report each verdict."""

    state = _load_state(config_path)
    verdicts: list[tuple[str, Verdict]] = []
    if github_issue_number is not None:
        verdicts.append(("github issue number", state.validator.check_issue_number(github_issue_number)))
    if analyzer_config is not None:
        document = _read_document(analyzer_config, "Analyzer config")
        verdicts.append(("analyzer config", state.validator.check_analyzer_config(document)))
    if coordinator_config is not None:
        document = _read_document(coordinator_config, "Coordinator config")
        verdicts.append(("coordinator config", state.validator.check_coordinator_config(document)))

    if not verdicts:
        console.print("[yellow]Nothing to check; pass at least one field option")
        raise typer.Exit(code=1)

    table = Table(title="Field Checks")
    table.add_column("Field")
    table.add_column("Status")
    table.add_column("Message")
    for name, verdict in verdicts:
        status = "[green]OK" if verdict.is_ok else "[red]Error"
        table.add_row(name, status, verdict.message)
    console.print(table)

    if not all(verdict.is_ok for _, verdict in verdicts):
        raise typer.Exit(code=1)


def run() -> None:
    app()
