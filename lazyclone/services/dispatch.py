"""Service: fan repositories out to worker processes and collect their outcomes."""

from __future__ import annotations

import os
import subprocess
import sys
from concurrent.futures import ThreadPoolExecutor

from ..core.errors import DispatchError
from ..core.log import log_repo_error
from ..core.models import RepositoryRecord, RunOutcome
from ..core.types import OutcomeStatus
from .worker import target_path

WORKER_MODULE = "lazyclone.cli.worker"


def worker_command(destination: str, record: RepositoryRecord) -> list[str]:
    """argv for one worker; every field is its own argument."""
    return [
        sys.executable,
        "-m",
        WORKER_MODULE,
        "--",
        destination,
        record.full_name,
        record.ssh_url,
        record.default_branch,
    ]


def parse_worker_output(stdout: str) -> RunOutcome | None:
    """The last result line wins; progress and noise are ignored."""
    outcome = None
    for line in (stdout or "").splitlines():
        parsed = RunOutcome.from_result_line(line.strip())
        if parsed is not None:
            outcome = parsed
    return outcome


def _run_one(destination: str, record: RepositoryRecord) -> RunOutcome:
    cmd = worker_command(destination, record)
    try:
        # stderr is inherited so clone progress streams to the terminal
        proc = subprocess.run(cmd, stdout=subprocess.PIPE, text=True, env=os.environ.copy())
    except OSError as e:
        raise DispatchError(f"Failed to start worker for {record.full_name}: {e}") from e

    outcome = parse_worker_output(proc.stdout)
    if outcome is not None:
        return outcome

    message = f"Worker exited with code {proc.returncode} without a result"
    log_repo_error(record.full_name, message)
    return RunOutcome(
        repo=record.full_name,
        path=target_path(destination, record.full_name),
        status=OutcomeStatus.error,
        message=message,
    )


def dispatch(destination: str, records: list[RepositoryRecord], concurrency: int) -> list[RunOutcome]:
    """Run one worker per record, at most `concurrency` at a time.

    Waits for every worker; failures are outcomes, not exceptions. Results are
    returned in input order.
    """
    if not records:
        return []
    with ThreadPoolExecutor(max_workers=max(1, concurrency)) as pool:
        futures = [pool.submit(_run_one, destination, r) for r in records]
        return [f.result() for f in futures]
