from pathlib import Path
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lazyclone.core.models import RepositoryRecord  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("GH_TOKEN", "GITHUB_TOKEN", "LAZY_CLONE_GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)


def make_record(name, owner="acme", fork=False, archived=False, ssh_url=None):
    return RepositoryRecord(
        owner=owner,
        name=name,
        ssh_url=ssh_url or f"git@github.com:{owner}/{name}.git",
        default_branch="main",
        is_fork=fork,
        is_archived=archived,
    )


class FakeSource:
    """Stands in for GitHubClient / GhCli."""

    def __init__(self, login="octo", orgs=None, repos=None, error=None):
        self._login = login
        self._orgs = orgs or []
        self._repos = repos or []
        self._error = error
        self.calls = []

    def login(self):
        self.calls.append("login")
        return self._login

    def organizations(self):
        self.calls.append("organizations")
        return list(self._orgs)

    def list_repos(self, namespace):
        self.calls.append(("list_repos", namespace))
        if self._error:
            raise self._error
        return list(self._repos)


class FakeGit:
    """GitClient double: 'clones' by writing a file, or fails for listed URLs."""

    def __init__(self, fail_urls=(), on_clone=None):
        self.fail_urls = set(fail_urls)
        self.on_clone = on_clone
        self.cloned = []

    def clone(self, url, target):
        if self.on_clone:
            self.on_clone(url, target)
        # like git, create the clone directory itself
        Path(target).mkdir()
        if url in self.fail_urls:
            Path(target, "partial").write_text("half")
            return False, "exit status 128"
        Path(target, ".git").mkdir(parents=True, exist_ok=True)
        Path(target, "README.md").write_text(url)
        self.cloned.append(url)
        return True, None
