"""Module holding constants used across lazy-clone."""

VERSION = "2.0.0"

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github.v3+json"
USER_AGENT = f"lazy-clone/{VERSION}"
GH_HOST = "github.com"
HTTP_TIMEOUT_SEC = 30

PER_PAGE = 100
GH_REPO_LIMIT = 1000
GH_REPO_FIELDS = "name,sshUrl,isFork,isArchived,owner,defaultBranchRef"

DEFAULT_CONCURRENCY = 6
DEFAULT_INCLUDE_ARCHIVED = True
DEFAULT_INCLUDE_FORKS = True

# prefix of the single line each worker process prints on stdout
RESULT_PREFIX = "lazyclone-result "
CLONE_ERROR_MESSAGE = "Failed to clone repository"
