"""Data carried between the lazy-clone components."""

from __future__ import annotations

import json
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .constants import DEFAULT_CONCURRENCY, RESULT_PREFIX
from .types import AuthMethod, NamespaceKind, OutcomeStatus


class Credential(BaseModel):
    """Validated credential; lives in memory for the duration of one run."""

    model_config = ConfigDict(frozen=True)

    method: AuthMethod
    login: str
    token: SecretStr | None = None


class Namespace(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: NamespaceKind
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value}/{self.name}"


class RepositoryRecord(BaseModel):
    """One remote repository, normalized across the gh CLI and REST shapes."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    ssh_url: str
    default_branch: str = ""
    is_fork: bool = False
    is_archived: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def from_rest(cls, raw: dict[str, Any]) -> RepositoryRecord:
        """Build from a REST `/repos` listing item."""
        owner = raw.get("owner") or {}
        return cls(
            owner=owner.get("login") or "",
            name=raw["name"],
            ssh_url=raw.get("ssh_url") or "",
            default_branch=raw.get("default_branch") or "",
            is_fork=bool(raw.get("fork")),
            is_archived=bool(raw.get("archived")),
        )

    @classmethod
    def from_gh(cls, raw: dict[str, Any]) -> RepositoryRecord:
        """Build from a `gh repo list --json ...` item."""
        owner = raw.get("owner") or {}
        branch_ref = raw.get("defaultBranchRef") or {}
        return cls(
            owner=owner.get("login") or "",
            name=raw["name"],
            ssh_url=raw.get("sshUrl") or "",
            default_branch=branch_ref.get("name") or "",
            is_fork=bool(raw.get("isFork")),
            is_archived=bool(raw.get("isArchived")),
        )


class RunOutcome(BaseModel):
    """Result of one worker invocation."""

    repo: str
    path: str
    status: OutcomeStatus
    message: str | None = None

    def to_result_line(self) -> str:
        return RESULT_PREFIX + self.model_dump_json()

    @classmethod
    def from_result_line(cls, line: str) -> RunOutcome | None:
        """Parse a worker result line; anything else yields None."""
        if not line.startswith(RESULT_PREFIX):
            return None
        try:
            return cls.model_validate(json.loads(line[len(RESULT_PREFIX):]))
        except ValueError:
            return None


class RunConfiguration(BaseModel):
    """Operator choices, resolved once before any network call."""

    model_config = ConfigDict(frozen=True)

    destination: str
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    include_archived: bool = True
    include_forks: bool = True
    json_out: str | None = None

    @field_validator("destination")
    @classmethod
    def _absolute_destination(cls, v: str) -> str:
        if not os.path.isabs(v):
            raise ValueError(f"Destination must be an absolute path: {v}")
        return v
