"""Service: aggregate worker outcomes into the human and JSON summaries."""

from __future__ import annotations

import json
import os
from typing import Any

import typer

from ..core.log import log_info, log_repo_error, log_success
from ..core.models import Credential, Namespace, RunConfiguration, RunOutcome
from ..core.types import OutcomeStatus


def run_info(credential: Credential, namespace: Namespace, config: RunConfiguration) -> dict[str, Any]:
    return {
        "auth_method": credential.method.value,
        "namespace_type": namespace.kind.value,
        "namespace_name": namespace.name,
        "destination": config.destination,
        "include_archived": config.include_archived,
        "include_forks": config.include_forks,
        "concurrency": config.concurrency,
    }


def build_summary(run: dict[str, Any], total_enumerated: int, outcomes: list[RunOutcome]) -> dict[str, Any]:
    errors = [
        {"repo": o.repo, "message": o.message or ""}
        for o in outcomes
        if o.status == OutcomeStatus.error
    ]
    return {
        "run": run,
        "stats": {
            "total_enumerated": total_enumerated,
            "cloned": sum(1 for o in outcomes if o.status == OutcomeStatus.cloned),
            "skipped_existing": sum(1 for o in outcomes if o.status == OutcomeStatus.skipped_existing),
            "errors": len(errors),
        },
        "errors": errors,
    }


def print_human(summary: dict[str, Any]) -> None:
    stats = summary["stats"]
    typer.echo("", err=True)
    log_success("Operation completed!")
    typer.echo(
        f"Summary: {stats['cloned']} cloned, {stats['skipped_existing']} skipped, {stats['errors']} errors",
        err=True,
    )
    for e in summary["errors"]:
        log_repo_error(e["repo"], e["message"])


def write_summary(summary: dict[str, Any], json_out: str | None) -> str:
    """Print the JSON document to stdout and, if asked, write it to `json_out`."""
    text = json.dumps(summary, indent=2)
    typer.echo(text)
    if json_out:
        parent = os.path.dirname(os.path.abspath(json_out))
        os.makedirs(parent, exist_ok=True)
        with open(json_out, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
        log_info(f"JSON summary written to: {json_out}")
    return text
