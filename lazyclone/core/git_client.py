"""Small helpers for running Git commands."""

from __future__ import annotations

import subprocess


class GitClient:
    # ---------- process helpers ----------
    @staticmethod
    def _run(cmd: list[str], cwd: str | None = None) -> tuple[bool, str | None]:
        # stdout is discarded so the worker's own stdout carries only its result line;
        # progress goes to the inherited stderr
        try:
            subprocess.check_call(cmd, cwd=cwd, stdout=subprocess.DEVNULL)
            return True, None
        except subprocess.CalledProcessError as e:
            return False, f"{e}"
        except OSError as e:
            return False, f"{e}"

    # ---------- clone ----------
    def clone(self, url: str, target: str) -> tuple[bool, str | None]:
        """Full clone with submodules over the given (SSH) URL."""
        cmd = ["git", "clone", "--recursive", "--origin", "origin", "--progress", url, target]
        return self._run(cmd)
