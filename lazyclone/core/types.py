"""Small types and Enums used by lazy-clone."""

from enum import Enum


class AuthChoice(str, Enum):
    """Authentication preference given on the command line."""

    auto = "auto"
    gh = "gh"
    token = "token"


class AuthMethod(str, Enum):
    """Credential strategy actually in use for a run."""

    gh = "gh"
    token = "token"


class NamespaceKind(str, Enum):
    user = "user"
    org = "org"


class OutcomeStatus(str, Enum):
    cloned = "cloned"
    skipped_existing = "skipped_existing"
    error = "error"
