"""GitHub REST operations used with a bearer token."""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Iterator
from typing import Any
from urllib.parse import urlencode

from .constants import API_BASE, GITHUB_API_ACCEPT, HTTP_TIMEOUT_SEC, PER_PAGE, USER_AGENT
from .models import Namespace, RepositoryRecord
from .types import NamespaceKind


class GitHubError(RuntimeError):
    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class GitHubClient:
    def __init__(
        self,
        token: str | None = None,
        api_base: str = API_BASE,
        timeout: float = HTTP_TIMEOUT_SEC,
        viewer: str | None = None,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        # login the token belongs to, when already known
        self.viewer = viewer

    # ---------- low-level HTTP ----------
    def _read(self, url: str) -> str:
        req = urllib.request.Request(url)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("User-Agent", USER_AGENT)
        if self.token:
            req.add_header("Authorization", f"token {self.token}")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                return resp.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            body = e.read().decode("utf-8", "ignore")
            try:
                message = json.loads(body).get("message") or body
            except (ValueError, AttributeError):
                message = body
            raise GitHubError(f"HTTP {e.code}: {message}".strip(), status=e.code) from e
        except urllib.error.URLError as e:
            raise GitHubError(f"Cannot reach GitHub API: {e.reason}") from e

    def _request_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.api_base}/{path.lstrip('/')}"
        if params:
            url += "?" + urlencode(params)
        body = self._read(url)
        if not body.strip():
            raise GitHubError(f"Empty response from GitHub API: {path}")
        try:
            return json.loads(body)
        except ValueError as e:
            raise GitHubError(f"Invalid JSON response from GitHub API: {path}") from e

    def _paginate(self, path: str, **params: Any) -> Iterator[list[dict[str, Any]]]:
        """Yield pages of `per_page` items, starting at page 1, until an empty page."""
        page = 1
        while True:
            data = self._request_json(path, {**params, "per_page": PER_PAGE, "page": page})
            if not isinstance(data, list):
                message = data.get("message") if isinstance(data, dict) else "unexpected payload"
                raise GitHubError(f"GitHub API returned a non-list page for {path}: {message}")
            if not data:
                return
            yield data
            page += 1

    # ---------- public API ----------
    def current_user(self) -> dict[str, Any]:
        data = self._request_json("user")
        if not isinstance(data, dict):
            raise GitHubError("Unexpected response from GitHub API: user")
        return data

    def login(self) -> str:
        login = self.current_user().get("login")
        if not login:
            raise GitHubError("Failed to get user login")
        return login

    def organizations(self) -> list[str]:
        orgs: set[str] = set()
        for page in self._paginate("user/orgs"):
            orgs.update(o["login"] for o in page if isinstance(o, dict) and o.get("login"))
        return sorted(orgs)

    def _repos_path(self, namespace: Namespace) -> tuple[str, dict[str, Any]]:
        if namespace.kind == NamespaceKind.org:
            return f"orgs/{namespace.name}/repos", {"type": "all"}
        # the public listing hides private repos, even the caller's own
        if self.viewer and namespace.name.lower() == self.viewer.lower():
            return "user/repos", {"affiliation": "owner"}
        return f"users/{namespace.name}/repos", {"type": "all"}

    def list_repos(self, namespace: Namespace) -> list[RepositoryRecord]:
        path, params = self._repos_path(namespace)
        records: list[RepositoryRecord] = []
        for page in self._paginate(path, **params):
            try:
                records.extend(RepositoryRecord.from_rest(r) for r in page)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise GitHubError(f"Malformed repository record from GitHub API: {e}") from e
        return records
