"""Worker process entrypoint: one repository per invocation.

Launched by the dispatcher as `python -m lazyclone.cli.worker DEST OWNER/NAME SSH_URL BRANCH`.
Prints exactly one result line on stdout.
"""

from __future__ import annotations

import typer

from ..services.worker import process_repository

app = typer.Typer(add_completion=False)


@app.command()
def worker(
    destination: str = typer.Argument(..., help="Destination root"),
    repo: str = typer.Argument(..., help="owner/name"),
    ssh_url: str = typer.Argument(..., help="SSH clone URL"),
    default_branch: str = typer.Argument("", help="Default branch name"),
):
    outcome = process_repository(destination, repo, ssh_url, default_branch)
    typer.echo(outcome.to_result_line())


if __name__ == "__main__":
    app()
