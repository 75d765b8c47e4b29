"""Plan execution for semcommit.

Contains:
- ExecutionError: Raised when a run stops part-way
- execute_plan: Materialize a validated, filtered plan as commits
"""

import logging
from typing import Callable, Optional

from semcommit.git import GitError, GitGateway
from semcommit.models import CommitPlan, ExecutedCommit, PlannedCommit

logger = logging.getLogger(__name__)

# Called as progress(current, total, commit) before each commit, 1-based
ProgressCallback = Callable[[int, int, PlannedCommit], None]


class ExecutionError(Exception):
    """Raised when execution stops before every commit was created.

    Commits already created stay in the repository. `commit_index` is the
    plan index of the first commit that was not created.
    """

    def __init__(self, executed: list[ExecutedCommit], commit_index: int, cause: BaseException):
        self.executed = executed
        self.commit_index = commit_index
        self.cause = cause
        if isinstance(cause, KeyboardInterrupt):
            reason = "interrupted"
        else:
            reason = str(cause)
        super().__init__(
            f"commit {commit_index + 1} failed after {len(executed)} commits were created: {reason}"
        )


def _paths_to_stage(files: list[str], rename_sources: dict[str, str]) -> list[str]:
    paths = list(files)
    for path in files:
        source = rename_sources.get(path)
        if source and source not in paths:
            paths.append(source)
    return paths


def execute_plan(
    plan: CommitPlan,
    gateway: GitGateway,
    dry_run: bool = False,
    progress: Optional[ProgressCallback] = None,
    rename_sources: Optional[dict[str, str]] = None,
) -> list[ExecutedCommit]:
    """Create one commit per planned commit, in plan order.

    Before each commit the index is cleared so only that commit's files
    are recorded. A renamed file is staged together with its old path so the
    commit records the rename rather than a copy.

    Args:
        plan: A validated plan with sensitive files already removed.
        gateway: Gateway for the repository.
        dry_run: Skip every git call and return commits with empty hashes.
        progress: Optional callback invoked before each commit.
        rename_sources: New path -> old path for staged renames.

    Returns:
        The executed commits, in plan order.

    Raises:
        ExecutionError: If git fails or the user interrupts; carries the
            commits created so far.
    """
    executed: list[ExecutedCommit] = []
    total = len(plan.commits)
    rename_sources = rename_sources or {}

    for i, commit in enumerate(plan.commits):
        if progress:
            progress(i + 1, total, commit)

        if dry_run:
            executed.append(ExecutedCommit(planned=commit))
            continue

        head_before = None
        committing = False
        try:
            gateway.unstage_all()
            gateway.add(_paths_to_stage(commit.files, rename_sources))
            head_before = gateway.head_commit()
            committing = True
            commit_hash = gateway.commit(commit.subject, commit.body)
        except (GitError, KeyboardInterrupt) as e:
            logger.debug("Execution stopped at commit %d/%d: %s", i + 1, total, e)
            if committing:
                # git may have recorded the commit before the interrupt landed
                head_after = gateway.head_commit()
                if head_after and head_after != head_before:
                    executed.append(ExecutedCommit(planned=commit, hash=head_after))
            raise ExecutionError(executed, len(executed), e) from e

        logger.debug("Committed %s: %s", commit_hash, commit.subject)
        executed.append(ExecutedCommit(planned=commit, hash=commit_hash))

    return executed
