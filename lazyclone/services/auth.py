"""Service: resolve and validate the credential for a run."""

from __future__ import annotations

import typer
from pydantic import SecretStr

from ..config.settings import Settings
from ..core.errors import AuthError
from ..core.gh_cli import GhCli
from ..core.github_client import GitHubClient, GitHubError
from ..core.log import log_info, log_success
from ..core.models import Credential
from ..core.types import AuthChoice, AuthMethod

_TOKEN_HELP = """
Please provide your GitHub token:
- Go to: https://github.com/settings/tokens
- Click 'Generate new token (classic)'
- Select scopes: 'repo' and 'read:org'
- Copy the generated token
"""


def auth_with_gh(gh: GhCli) -> Credential:
    if not gh.available():
        raise AuthError("GitHub CLI 'gh' not found. Install https://cli.github.com/ or use --auth token.")

    log_info("GitHub CLI detected. Attempting to authenticate...")
    if gh.is_authenticated():
        log_info("GitHub CLI already authenticated")
    else:
        log_info("GitHub CLI not authenticated. Starting browser login...")
        typer.echo("\nA browser window will open for GitHub authentication.", err=True)
        typer.echo("Please complete the login process in your browser.\n", err=True)
        if not gh.login_web():
            raise AuthError("GitHub CLI authentication failed")
        log_success("GitHub CLI authentication completed")

    try:
        login = gh.login()
    except GitHubError as e:
        raise AuthError(str(e)) from e
    log_success(f"Authenticated with GitHub CLI as: {login}")
    return Credential(method=AuthMethod.gh, login=login)


def validate_token(client: GitHubClient) -> str:
    """Call the identity endpoint and return the login; any failure is fatal."""
    try:
        user = client.current_user()
    except GitHubError as e:
        if e.status == 401 or "bad credentials" in str(e).lower():
            raise AuthError("Invalid GitHub token") from e
        raise AuthError(f"Token validation failed: {e}") from e
    if not user or user.get("message") == "Bad credentials":
        raise AuthError("Invalid GitHub token")
    login = user.get("login")
    if not login:
        raise AuthError("Failed to get user login")
    return login


def auth_with_token(settings: Settings) -> Credential:
    log_info("Using GitHub token for authentication...")
    token = settings.github_token
    if not token:
        typer.echo(_TOKEN_HELP, err=True)
        token = typer.prompt(
            "Enter your GitHub token (input will be hidden)", hide_input=True, default="", show_default=False
        )
    token = (token or "").strip()
    if not token:
        raise AuthError("No token provided")

    log_info("Validating token...")
    client = GitHubClient(token=token, api_base=settings.api_base, timeout=settings.http_timeout)
    login = validate_token(client)
    log_success(f"Authenticated with GitHub token as: {login}")
    return Credential(method=AuthMethod.token, login=login, token=SecretStr(token))


def _choose_method() -> AuthMethod:
    typer.echo("\nAuthentication Options:", err=True)
    typer.echo("1) GitHub CLI (recommended - opens browser)", err=True)
    typer.echo("2) GitHub Token (paste your token)\n", err=True)
    choice = typer.prompt("Choose authentication method (1 or 2)", default="1")
    if choice.strip() == "1":
        return AuthMethod.gh
    if choice.strip() == "2":
        return AuthMethod.token
    raise AuthError("Invalid choice. Please select 1 or 2.")


def authenticate(
    preference: AuthChoice,
    settings: Settings,
    *,
    interactive: bool = True,
    gh: GhCli | None = None,
) -> Credential:
    """Produce a validated Credential for the requested auth preference."""
    gh = gh or GhCli(host=settings.gh_host, repo_limit=settings.gh_repo_limit)

    if preference == AuthChoice.gh:
        return auth_with_gh(gh)
    if preference == AuthChoice.token:
        return auth_with_token(settings)

    if gh.is_authenticated():
        method = _choose_method() if interactive else AuthMethod.gh
        if method == AuthMethod.gh:
            return auth_with_gh(gh)
        return auth_with_token(settings)

    log_info("GitHub CLI not available, using token authentication")
    return auth_with_token(settings)
