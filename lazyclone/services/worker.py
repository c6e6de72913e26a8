"""Service: clone one repository unless a local copy already exists."""

from __future__ import annotations

import glob
import os
import shutil
import tempfile

from ..core.constants import CLONE_ERROR_MESSAGE
from ..core.git_client import GitClient
from ..core.log import log_cloned, log_repo_error, log_skip
from ..core.models import RunOutcome
from ..core.types import OutcomeStatus

STAGING_SUFFIX = ".partial"


def target_path(destination: str, full_name: str) -> str:
    return os.path.join(destination, os.path.basename(full_name.rstrip("/")))


def _exists(target: str) -> bool:
    return os.path.isdir(target) or os.path.isdir(os.path.join(target, ".git"))


def _skipped(full_name: str, target: str) -> RunOutcome:
    log_skip(full_name, target)
    return RunOutcome(repo=full_name, path=target, status=OutcomeStatus.skipped_existing)


def _failed(full_name: str, target: str, message: str = CLONE_ERROR_MESSAGE) -> RunOutcome:
    log_repo_error(full_name, message)
    return RunOutcome(repo=full_name, path=target, status=OutcomeStatus.error, message=message)


def _staging_prefix(target: str) -> str:
    return f".{os.path.basename(target)}.lazyclone-"


def remove_stale_staging(destination: str, target: str) -> None:
    """Drop staging dirs left behind by workers that were killed mid-clone.

    mkdtemp names are exactly eight random characters, so `.a.lazyclone-????????.partial`
    never matches the staging dir of a sibling repo such as `a.lazyclone-x`.
    """
    pattern = os.path.join(glob.escape(destination), glob.escape(_staging_prefix(target)) + "?" * 8 + STAGING_SUFFIX)
    for stale in glob.glob(pattern):
        shutil.rmtree(stale, ignore_errors=True)


def process_repository(
    destination: str,
    full_name: str,
    ssh_url: str,
    default_branch: str = "",
    git: GitClient | None = None,
) -> RunOutcome:
    """Produce exactly one outcome for one repository.

    The clone goes into a hidden sibling of the target and is renamed into
    place only on success, so an interrupted or failed clone never leaves a
    directory that the next run would mistake for an existing copy. Git
    creates the clone directory inside the private staging parent, so the
    final directory keeps the usual umask permissions.

    `default_branch` is informational: the clone checks out the remote HEAD.
    """
    git = git or GitClient()
    target = target_path(destination, full_name)

    if _exists(target):
        return _skipped(full_name, target)

    os.makedirs(destination, exist_ok=True)
    remove_stale_staging(destination, target)
    staging = tempfile.mkdtemp(prefix=_staging_prefix(target), suffix=STAGING_SUFFIX, dir=destination)
    clone_dir = os.path.join(staging, os.path.basename(target))
    try:
        ok, _err = git.clone(ssh_url, clone_dir)
        if not ok:
            return _failed(full_name, target)
        # another run may have created the target while we were cloning
        if _exists(target):
            return _skipped(full_name, target)
        try:
            os.rename(clone_dir, target)
        except OSError as e:
            return _failed(full_name, target, f"{CLONE_ERROR_MESSAGE}: {e}")
    finally:
        shutil.rmtree(staging, ignore_errors=True)

    log_cloned(full_name, target)
    return RunOutcome(repo=full_name, path=target, status=OutcomeStatus.cloned)
