"""Resolve the immutable RunConfiguration from flags, settings and prompts."""

from __future__ import annotations

import os

import typer
from pydantic import ValidationError

from ..core.errors import ConfigError
from ..core.log import log_error, log_success
from ..core.models import RunConfiguration
from .settings import Settings


def prompt_destination() -> str:
    """Ask until an absolute path is entered."""
    while True:
        dest = typer.prompt("Enter absolute destination directory (e.g., /srv/git/<namespace>)").strip()
        if os.path.isabs(dest):
            return dest
        log_error("Please enter an absolute path (starting with /)")


def resolve_configuration(
    settings: Settings,
    *,
    dest: str | None,
    include_archived: bool | None = None,
    include_forks: bool | None = None,
    concurrency: int | None = None,
    json_out: str | None = None,
) -> RunConfiguration:
    # a relative --dest is fatal here, before anything touches the network
    if dest is not None and not os.path.isabs(dest):
        raise ConfigError(f"Destination must be an absolute path: {dest}")
    if dest is None:
        dest = prompt_destination()

    try:
        config = RunConfiguration(
            destination=dest,
            concurrency=concurrency if concurrency is not None else settings.default_concurrency,
            include_archived=(
                include_archived if include_archived is not None else settings.default_include_archived
            ),
            include_forks=include_forks if include_forks is not None else settings.default_include_forks,
            json_out=json_out,
        )
    except ValidationError as e:
        raise ConfigError(str(e)) from e
    log_success(f"Destination: {config.destination}")
    return config
