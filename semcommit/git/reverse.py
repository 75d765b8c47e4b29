"""Reversing recent commits back into the working tree.

Contains:
- ReverseResult: Outcome of a reverse run
- reverse_commits: Dissolve the last N commits into uncommitted changes
"""

import logging
from dataclasses import dataclass

from semcommit.git.exceptions import PushedCommitError
from semcommit.git.gateway import GitGateway

logger = logging.getLogger(__name__)


@dataclass
class ReverseResult:
    """Outcome of reverse_commits."""

    count: int
    was_pushed: bool


def reverse_commits(gateway: GitGateway, count: int = 1, force: bool = False) -> ReverseResult:
    """Undo the last `count` commits, keeping their changes unstaged.

    Runs `git reset --mixed HEAD~count`: the branch tip moves back and every
    change from the dissolved commits is left in the working tree. Untracked
    files are not touched.

    Args:
        gateway: Gateway for the repository.
        count: Number of commits to reverse (at least 1).
        force: Proceed even if the commits are reachable from a remote branch.

    Returns:
        ReverseResult; was_pushed tells the caller a force-push will be needed.

    Raises:
        ValueError: If count is less than 1.
        InsufficientHistoryError: If the branch has too few commits.
        PushedCommitError: If any reversed commit was pushed and force is False.
        GitError: If the reset fails.
    """
    if count < 1:
        raise ValueError(f"invalid reverse count {count}: must be a positive integer")

    gateway.ensure_commit_depth(count)

    # The oldest reversed commit is pushed iff any of the N commits is
    oldest = "HEAD" if count == 1 else f"HEAD~{count - 1}"
    pushed = gateway.was_pushed(oldest)
    if pushed and not force:
        raise PushedCommitError(count)

    gateway.reset("mixed", f"HEAD~{count}")
    logger.debug("Reversed %d commit(s) (pushed=%s)", count, pushed)
    return ReverseResult(count=count, was_pushed=pushed)
