"""Git-related exception classes.

Contains all exception classes for git operations:
- GitError: Base exception for git-related errors (carries stderr)
- NotARepositoryError: Raised outside a git work tree
- PushedCommitError: Raised when reversing published commits without --force
- InsufficientHistoryError: Raised when reversing more commits than exist
"""

from typing import Optional


class GitError(Exception):
    """Custom exception for git-related errors."""

    def __init__(self, message: str, stderr: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode


class NotARepositoryError(GitError):
    """Raised when the working directory is not inside a git repository."""

    pass


class PushedCommitError(GitError):
    """Raised when the commits to reverse are reachable from a remote branch."""

    def __init__(self, count: int = 1):
        self.count = count
        if count == 1:
            headline = "HEAD commit has been pushed to origin."
        else:
            headline = f"One or more of the last {count} commits have been pushed to origin."
        super().__init__(
            f"{headline}\n"
            "Reversing will require force-push to sync with remote.\n"
            "Use --reverse --force to proceed."
        )


class InsufficientHistoryError(GitError):
    """Raised when asked to reverse more commits than the branch holds."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(f"cannot reverse {requested} commits: only {available} commits exist")
