import shutil
import subprocess
import threading
import time

import pytest

from conftest import ROOT, make_record
from lazyclone.core.errors import DispatchError
from lazyclone.core.models import RunOutcome
from lazyclone.core.types import OutcomeStatus
from lazyclone.services import dispatch as dispatch_mod
from lazyclone.services.dispatch import dispatch, parse_worker_output, worker_command


def test_worker_command_passes_discrete_arguments():
    record = make_record("odd|name", ssh_url="ssh://git@host:22/acme/odd|name.git")
    cmd = worker_command("/srv/git", record)
    assert cmd[1:4] == ["-m", "lazyclone.cli.worker", "--"]
    assert cmd[4:] == ["/srv/git", "acme/odd|name", "ssh://git@host:22/acme/odd|name.git", "main"]


def test_parse_worker_output_ignores_noise():
    line = RunOutcome(repo="acme/a", path="/x/a", status=OutcomeStatus.cloned).to_result_line()
    assert parse_worker_output(f"Cloning into...\n{line}\n").status == OutcomeStatus.cloned
    assert parse_worker_output("") is None


def _fake_run_factory(statuses, active=None, peak=None):
    lock = threading.Lock()

    def fake_run(cmd, **kwargs):
        repo, path = cmd[5], cmd[4] + "/" + cmd[5].split("/")[-1]
        if active is not None:
            with lock:
                active[0] += 1
                peak[0] = max(peak[0], active[0])
            time.sleep(0.02)
            with lock:
                active[0] -= 1
        status = statuses.get(repo)
        if status is None:
            return subprocess.CompletedProcess(cmd, 1, stdout="Traceback...\n")
        line = RunOutcome(repo=repo, path=path, status=status).to_result_line()
        return subprocess.CompletedProcess(cmd, 0, stdout=line + "\n")

    return fake_run


def test_outcomes_are_collected_in_input_order(monkeypatch):
    statuses = {"acme/a": OutcomeStatus.cloned, "acme/b": OutcomeStatus.skipped_existing}
    monkeypatch.setattr(dispatch_mod.subprocess, "run", _fake_run_factory(statuses))

    outcomes = dispatch("/srv/git", [make_record("a"), make_record("b"), make_record("c")], concurrency=3)

    assert [o.repo for o in outcomes] == ["acme/a", "acme/b", "acme/c"]
    assert [o.status for o in outcomes] == [
        OutcomeStatus.cloned,
        OutcomeStatus.skipped_existing,
        OutcomeStatus.error,
    ]
    assert "exited with code 1" in outcomes[2].message


def test_concurrency_is_bounded(monkeypatch):
    statuses = {f"acme/r{i}": OutcomeStatus.cloned for i in range(12)}
    active, peak = [0], [0]
    monkeypatch.setattr(dispatch_mod.subprocess, "run", _fake_run_factory(statuses, active, peak))

    outcomes = dispatch("/srv/git", [make_record(f"r{i}") for i in range(12)], concurrency=3)

    assert len(outcomes) == 12
    assert 1 <= peak[0] <= 3


def test_launch_failure_is_a_dispatch_error(monkeypatch):
    def broken(cmd, **kwargs):
        raise FileNotFoundError("no interpreter")

    monkeypatch.setattr(dispatch_mod.subprocess, "run", broken)
    with pytest.raises(DispatchError):
        dispatch("/srv/git", [make_record("a")], concurrency=1)


def test_no_records_no_workers(monkeypatch):
    monkeypatch.setattr(dispatch_mod.subprocess, "run", lambda *a, **k: pytest.fail("launched"))
    assert dispatch("/srv/git", [], concurrency=6) == []


# ---------- real worker processes ----------
requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def worker_env(monkeypatch):
    monkeypatch.setenv("PYTHONPATH", str(ROOT))
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")


def _bare_repos(root, names):
    root.mkdir()
    for n in names:
        subprocess.run(["git", "init", "--bare", "-q", str(root / f"{n}.git")], check=True)
    return [make_record(n, ssh_url=str(root / f"{n}.git")) for n in names]


def test_real_workers_skip_existing_directories(tmp_path, worker_env):
    dest = tmp_path / "dest"
    for n in ("a", "b"):
        (dest / n).mkdir(parents=True)
        (dest / n / "keep.txt").write_text(n)

    outcomes = dispatch(str(dest), [make_record("a"), make_record("b")], concurrency=2)

    assert [o.status for o in outcomes] == [OutcomeStatus.skipped_existing] * 2
    assert (dest / "a" / "keep.txt").read_text() == "a"


@requires_git
def test_real_clone_then_rerun_skips_everything(tmp_path, worker_env):
    records = _bare_repos(tmp_path / "remote", ["one", "two", "three"])
    dest = tmp_path / "dest"

    first = dispatch(str(dest), records, concurrency=2)
    second = dispatch(str(dest), records, concurrency=2)

    assert [o.status for o in first] == [OutcomeStatus.cloned] * 3
    assert [o.status for o in second] == [OutcomeStatus.skipped_existing] * 3
    assert sorted(p.name for p in dest.iterdir()) == ["one", "three", "two"]


@requires_git
def test_real_clone_of_missing_remote_is_one_error(tmp_path, worker_env):
    records = _bare_repos(tmp_path / "remote", ["one", "two"])
    records.append(make_record("ghost", ssh_url=str(tmp_path / "remote" / "ghost.git")))
    dest = tmp_path / "dest"

    outcomes = dispatch(str(dest), records, concurrency=3)

    errors = [o for o in outcomes if o.status == OutcomeStatus.error]
    assert [o.status for o in outcomes].count(OutcomeStatus.cloned) == 2
    assert [e.repo for e in errors] == ["acme/ghost"]
    assert not (dest / "ghost").exists()
