"""Thin wrapper over the GitHub CLI (`gh`) for the delegated-session flow."""

from __future__ import annotations

import json
import shutil
import subprocess

from .constants import GH_HOST, GH_REPO_FIELDS, GH_REPO_LIMIT
from .github_client import GitHubError
from .models import Namespace, RepositoryRecord


class GhCli:
    def __init__(self, executable: str = "gh", host: str = GH_HOST, repo_limit: int = GH_REPO_LIMIT) -> None:
        self.executable = executable
        self.host = host
        self.repo_limit = repo_limit

    # ---------- process helpers ----------
    def _run(self, args: list[str]) -> bool:
        """Run interactively (inherits the terminal); True on exit 0."""
        try:
            return subprocess.call([self.executable, *args]) == 0
        except OSError:
            return False

    def _run_out(self, args: list[str]) -> tuple[bool, str]:
        try:
            out = subprocess.check_output([self.executable, *args], stderr=subprocess.PIPE)
            return True, out.decode("utf-8").strip()
        except subprocess.CalledProcessError as e:
            return False, (e.stderr or b"").decode("utf-8", "ignore").strip()
        except OSError as e:
            return False, str(e)

    # ---------- session ----------
    def available(self) -> bool:
        return shutil.which(self.executable) is not None

    def is_authenticated(self) -> bool:
        if not self.available():
            return False
        ok, _ = self._run_out(["auth", "status", "-h", self.host])
        return ok

    def login_web(self) -> bool:
        """Browser-based `gh auth login`; blocks until gh reports the result."""
        return self._run(["auth", "login", "-h", self.host, "-p", "https", "-w"])

    # ---------- queries ----------
    def login(self) -> str:
        ok, out = self._run_out(["api", "user", "-q", ".login"])
        if not ok or not out:
            raise GitHubError(f"Failed to get user login via gh: {out}")
        return out

    def organizations(self) -> list[str]:
        ok, out = self._run_out(["api", "user/orgs", "-q", ".[].login"])
        if not ok:
            raise GitHubError(f"Failed to list organizations via gh: {out}")
        return [line.strip() for line in out.splitlines() if line.strip()]

    def list_repos(self, namespace: Namespace) -> list[RepositoryRecord]:
        ok, out = self._run_out(
            ["repo", "list", namespace.name, "--limit", str(self.repo_limit), "--json", GH_REPO_FIELDS]
        )
        if not ok:
            raise GitHubError(f"gh repo list failed for {namespace}: {out}")
        try:
            data = json.loads(out or "[]")
        except ValueError as e:
            raise GitHubError("Invalid JSON output from GitHub CLI") from e
        if not isinstance(data, list):
            raise GitHubError("Invalid JSON output from GitHub CLI: expected a list")
        try:
            return [RepositoryRecord.from_gh(r) for r in data]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GitHubError(f"Malformed repository record from GitHub CLI: {e}") from e
