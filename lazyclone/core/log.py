"""Colored console output shared by the coordinator and the workers."""

from __future__ import annotations

import typer


def _tag(label: str, color: str) -> str:
    return typer.style(f"[{label}]", fg=color, bold=color == typer.colors.YELLOW)


def log_info(message: str) -> None:
    typer.echo(f"{_tag('INFO', typer.colors.BLUE)} {message}", err=True)


def log_success(message: str) -> None:
    typer.echo(f"{_tag('SUCCESS', typer.colors.GREEN)} {message}", err=True)


def log_warning(message: str) -> None:
    typer.echo(f"{_tag('WARNING', typer.colors.YELLOW)} {message}", err=True)


def log_error(message: str) -> None:
    typer.echo(f"{_tag('ERROR', typer.colors.RED)} {message}", err=True)


# ---------- per-repository status lines ----------
def log_cloned(repo: str, path: str) -> None:
    typer.echo(f"{_tag('cloned', typer.colors.GREEN)} {repo} → {path}", err=True)


def log_skip(repo: str, path: str) -> None:
    typer.echo(f"{_tag('skip-existing', typer.colors.YELLOW)} {repo} at {path}", err=True)


def log_repo_error(repo: str, message: str) -> None:
    typer.echo(f"{_tag('error', typer.colors.RED)} {repo} : {message}", err=True)
