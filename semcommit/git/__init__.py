"""Git access layer for semcommit.

This package isolates every interaction with the git binary:
- exceptions: GitError, NotARepositoryError, PushedCommitError, InsufficientHistoryError
- runner: _run_git_command, get_repo_root
- status: parse_porcelain, STATUS_ARGS
- diff: parse_numstat, truncate_diff, NumstatEntry, TRUNCATION_MARKER
- gateway: GitGateway
- reverse: reverse_commits, ReverseResult
"""

# Exceptions
from semcommit.git.exceptions import (
    GitError,
    NotARepositoryError,
    PushedCommitError,
    InsufficientHistoryError,
)

# Runner utilities
from semcommit.git.runner import (
    _run_git_command,
    get_repo_root,
)

# Status parsing
from semcommit.git.status import (
    STATUS_ARGS,
    parse_porcelain,
)

# Diff helpers
from semcommit.git.diff import (
    NumstatEntry,
    TRUNCATION_MARKER,
    parse_numstat,
    truncate_diff,
)

# Gateway
from semcommit.git.gateway import GitGateway

# Reverse
from semcommit.git.reverse import (
    ReverseResult,
    reverse_commits,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    "PushedCommitError",
    "InsufficientHistoryError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Status
    "STATUS_ARGS",
    "parse_porcelain",
    # Diff
    "NumstatEntry",
    "TRUNCATION_MARKER",
    "parse_numstat",
    "truncate_diff",
    # Gateway
    "GitGateway",
    # Reverse
    "ReverseResult",
    "reverse_commits",
]
