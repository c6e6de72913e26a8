"""CLI entrypoint: clone every missing repository of a GitHub user or org."""

from __future__ import annotations

import sys

import typer

from ..config.run import resolve_configuration
from ..config.settings import get_settings
from ..core.constants import VERSION
from ..core.errors import LazyCloneError
from ..core.log import log_error
from ..core.types import AuthChoice, NamespaceKind
from ..services.clone import run_clone

app = typer.Typer(
    add_completion=False,
    help="lazy-clone: clone all repos from a GitHub user or org (skip-existing; token-aware picker).",
)

_TRUE = {"true", "yes", "y", "1", "on"}
_FALSE = {"false", "no", "n", "0", "off"}


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise typer.BadParameter(f"expected true or false, got {value!r}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"lazy-clone v{VERSION}")
        raise typer.Exit()


@app.command()
def clone(
    auth: AuthChoice = typer.Option(AuthChoice.auto, "--auth", case_sensitive=False, help="Authentication method"),
    namespace_type: NamespaceKind | None = typer.Option(
        None, "--type", case_sensitive=False, help="Namespace type"
    ),
    name: str | None = typer.Option(None, "--name", help="Namespace name"),
    dest: str | None = typer.Option(None, "--dest", help="Absolute destination path"),
    include_archived: str | None = typer.Option(
        None, "--include-archived", metavar="BOOL", callback=_parse_bool, help="Include archived repos (default: true)"
    ),
    include_forks: str | None = typer.Option(
        None, "--include-forks", metavar="BOOL", callback=_parse_bool, help="Include forked repos (default: true)"
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", min=1, help="Number of concurrent clones (default: 6)"
    ),
    json_out: str | None = typer.Option(None, "--json-out", help="Write JSON summary to file"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
):
    """
    Clone every repository of a user or organization that is not already on disk.
    Existing directories are skipped, never updated.

    Examples:
      lazy-clone
      lazy-clone --auth gh --type user --name myuser --dest /srv/git/myuser
      lazy-clone --auth token --type org --name myorg --dest /srv/git/myorg --include-forks false --concurrency 8
    """
    typer.echo(f"lazy-clone v{VERSION}\n==================\n", err=True)
    s = get_settings()
    try:
        config = resolve_configuration(
            s,
            dest=dest,
            include_archived=include_archived,
            include_forks=include_forks,
            concurrency=concurrency,
            json_out=json_out,
        )
        run_clone(
            config,
            s,
            auth=auth,
            namespace_kind=namespace_type,
            namespace_name=name,
            interactive=sys.stdin.isatty(),
        )
    except LazyCloneError as e:
        log_error(str(e))
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
