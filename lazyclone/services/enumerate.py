"""Service: list, normalize, deduplicate and filter a namespace's repositories."""

from __future__ import annotations

from ..core.errors import EnumerationError
from ..core.github_client import GitHubError
from ..core.log import log_info, log_warning
from ..core.models import Namespace, RepositoryRecord
from .namespace import NamespaceSource


def dedupe_records(records: list[RepositoryRecord]) -> list[RepositoryRecord]:
    seen: set[str] = set()
    unique: list[RepositoryRecord] = []
    for r in records:
        if r.full_name in seen:
            continue
        seen.add(r.full_name)
        unique.append(r)
    return unique


def enumerate_repos(source: NamespaceSource, namespace: Namespace) -> list[RepositoryRecord]:
    """Complete listing for the namespace; any malformed page aborts the run."""
    log_info(f"Enumerating repositories for {namespace}...")
    try:
        records = source.list_repos(namespace)
    except GitHubError as e:
        raise EnumerationError(f"Failed to enumerate repositories: {e}") from e

    records = dedupe_records(records)
    if not records:
        log_warning(f"No repositories found for {namespace}")
    return records


def filter_records(
    records: list[RepositoryRecord],
    *,
    include_archived: bool,
    include_forks: bool,
) -> list[RepositoryRecord]:
    return [
        r
        for r in records
        if (include_archived or not r.is_archived) and (include_forks or not r.is_fork)
    ]
