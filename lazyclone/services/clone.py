"""Services for the clone run: auth, namespace, enumerate, dispatch, summarize."""

from __future__ import annotations

import os
from typing import Any

from ..config.settings import Settings
from ..core.gh_cli import GhCli
from ..core.github_client import GitHubClient
from ..core.log import log_info, log_warning
from ..core.models import Credential, RunConfiguration
from ..core.types import AuthChoice, AuthMethod, NamespaceKind
from .auth import authenticate
from .dispatch import dispatch
from .enumerate import enumerate_repos, filter_records
from .namespace import NamespaceSource, resolve_namespace
from .summary import build_summary, print_human, run_info, write_summary


def source_for(credential: Credential, settings: Settings) -> NamespaceSource:
    if credential.method == AuthMethod.gh:
        return GhCli(host=settings.gh_host, repo_limit=settings.gh_repo_limit)
    token = credential.token.get_secret_value() if credential.token else None
    return GitHubClient(
        token=token, api_base=settings.api_base, timeout=settings.http_timeout, viewer=credential.login
    )


def run_clone(
    config: RunConfiguration,
    settings: Settings,
    *,
    auth: AuthChoice = AuthChoice.auto,
    namespace_kind: NamespaceKind | None = None,
    namespace_name: str | None = None,
    interactive: bool = True,
) -> dict[str, Any]:
    """Clone every repository of the chosen namespace that is missing locally."""
    credential = authenticate(auth, settings, interactive=interactive)
    source = source_for(credential, settings)
    namespace = resolve_namespace(source, namespace_kind, namespace_name)

    records = enumerate_repos(source, namespace)
    selected = filter_records(
        records,
        include_archived=config.include_archived,
        include_forks=config.include_forks,
    )
    if records and not selected:
        log_warning("No repositories match the current filters")

    os.makedirs(config.destination, exist_ok=True)
    if selected:
        log_info(f"Found {len(records)} repositories ({len(selected)} selected)")
        log_info(f"Starting clone process with concurrency {config.concurrency}...")
    outcomes = dispatch(config.destination, selected, config.concurrency)

    summary = build_summary(run_info(credential, namespace, config), len(records), outcomes)
    print_human(summary)
    write_summary(summary, config.json_out)
    return summary
