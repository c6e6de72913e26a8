"""Service: pick the user or organization namespace to clone from."""

from __future__ import annotations

from typing import Protocol

import typer

from ..core.errors import NamespaceError
from ..core.github_client import GitHubError
from ..core.log import log_info, log_success
from ..core.models import Namespace, RepositoryRecord
from ..core.types import NamespaceKind


class NamespaceSource(Protocol):
    """What both GitHubClient and GhCli provide."""

    def login(self) -> str: ...

    def organizations(self) -> list[str]: ...

    def list_repos(self, namespace: Namespace) -> list[RepositoryRecord]: ...


def build_menu(login: str, orgs: list[str]) -> list[Namespace]:
    """Option 1 is always the user; organizations follow in fetched order."""
    menu = [Namespace(kind=NamespaceKind.user, name=login)]
    menu.extend(Namespace(kind=NamespaceKind.org, name=o) for o in orgs)
    return menu


def select_namespace(menu: list[Namespace], choice: int) -> Namespace:
    if not 1 <= choice <= len(menu):
        raise NamespaceError("Invalid selection")
    return menu[choice - 1]


def present_namespace_picker(source: NamespaceSource) -> Namespace:
    try:
        login = source.login()
        orgs = source.organizations()
    except GitHubError as e:
        raise NamespaceError(str(e)) from e
    if not login:
        raise NamespaceError("Failed to get user login")

    menu = build_menu(login, orgs)
    log_info("Available namespaces:")
    for i, ns in enumerate(menu, start=1):
        label = "User" if ns.kind == NamespaceKind.user else "Org"
        typer.echo(f"{i}) {label}: {ns.name}", err=True)
    typer.echo("", err=True)

    raw = typer.prompt(f"Select namespace (1-{len(menu)})")
    try:
        choice = int(str(raw).strip())
    except ValueError as e:
        raise NamespaceError("Invalid selection") from e

    namespace = select_namespace(menu, choice)
    log_success(f"Selected: {namespace}")
    return namespace


def resolve_namespace(
    source: NamespaceSource,
    kind: NamespaceKind | None = None,
    name: str | None = None,
) -> Namespace:
    """Use --type/--name when both are given, otherwise ask."""
    if kind is not None and name:
        return Namespace(kind=kind, name=name)
    return present_namespace_picker(source)
