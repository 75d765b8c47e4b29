"""Analysis context builder.

Turns the current working-tree state into the AnalysisRequest handed to the
LLM: the file set with change kinds and scopes, a bounded diff, recent commit
subjects for style, and the rules block.
"""

import logging
from typing import Optional

from semcommit.config import BEHAVIORAL_TEST, MAX_DIFF_CHARS, MAX_MESSAGE_LENGTH, RECENT_COMMIT_COUNT
from semcommit.git import GitError, GitGateway, truncate_diff
from semcommit.models import STATUS_MODIFIED, AnalysisRequest, CommitRules, FileChange
from semcommit.repo_config import RepoConfig, allowed_types, default_repo_config, has_scopes
from semcommit.scope import resolve_scope

logger = logging.getLogger(__name__)


class NoChangesError(Exception):
    """Raised when there is nothing to commit."""

    def __init__(self, staged_only: bool = False):
        self.staged_only = staged_only
        if staged_only:
            message = "nothing staged to commit"
        else:
            message = "nothing to commit - working tree is clean"
        super().__init__(message)


def _build_rules(repo_config: RepoConfig) -> CommitRules:
    return CommitRules(
        types=allowed_types(repo_config),
        max_message_length=MAX_MESSAGE_LENGTH,
        behavioral_test=BEHAVIORAL_TEST,
    )


def _recent_commits(gateway: GitGateway) -> list[str]:
    """Fetch recent subjects; failures are not fatal."""
    try:
        return gateway.recent_commits(RECENT_COMMIT_COUNT)
    except GitError as e:
        logger.debug("Could not read recent commits: %s", e)
        return []


def build_analysis_request(
    gateway: GitGateway,
    repo_config: Optional[RepoConfig] = None,
    staged_only: bool = False,
    single_commit: bool = False,
) -> AnalysisRequest:
    """Build the LLM request for the current working tree.

    Args:
        gateway: Gateway for the repository.
        repo_config: Loaded repo config (defaults when None).
        staged_only: Only consider files with staged changes.
        single_commit: Ask for exactly one commit covering every file.

    Returns:
        The assembled AnalysisRequest.

    Raises:
        NoChangesError: If there are no candidate files.
        GitError: If status or diff collection fails.
    """
    repo_config = repo_config or default_repo_config()

    status = gateway.status()
    candidates = status.staged if staged_only else status.all_files
    if not candidates:
        raise NoChangesError(staged_only)

    numstat = gateway.diff_numstat(staged_only)

    files = []
    for path in candidates:
        entry = numstat.get(path)
        files.append(
            FileChange(
                path=path,
                status=status.status_of(path),
                scope=resolve_scope(path, repo_config),
                diff_summary=entry.summary if entry else "",
            )
        )

    diff = truncate_diff(gateway.diff(staged_only, untracked=status.untracked), MAX_DIFF_CHARS)

    request = AnalysisRequest(
        files=files,
        diff=diff,
        recent_commits=_recent_commits(gateway),
        has_scopes=has_scopes(repo_config),
        rules=_build_rules(repo_config),
        single_commit=single_commit,
        rename_sources={path: src for path, src in status.rename_sources.items() if path in candidates},
    )
    logger.debug("Built analysis request: %s", summarize_request(request))
    return request


def build_request_for_files(
    gateway: GitGateway,
    paths: list[str],
    repo_config: Optional[RepoConfig] = None,
) -> AnalysisRequest:
    """Build a request for an explicit path list without inspecting status.

    Every path is reported as modified; the diff is limited to the paths.

    Args:
        gateway: Gateway for the repository.
        paths: Repo-relative paths to include.
        repo_config: Loaded repo config (defaults when None).

    Returns:
        The assembled AnalysisRequest.

    Raises:
        NoChangesError: If `paths` is empty.
    """
    if not paths:
        raise NoChangesError()

    repo_config = repo_config or default_repo_config()
    numstat = gateway.diff_numstat(False)

    files = [
        FileChange(
            path=path,
            status=STATUS_MODIFIED,
            scope=resolve_scope(path, repo_config),
            diff_summary=numstat[path].summary if path in numstat else "",
        )
        for path in paths
    ]

    return AnalysisRequest(
        files=files,
        diff=truncate_diff(gateway.diff(False, paths), MAX_DIFF_CHARS),
        recent_commits=_recent_commits(gateway),
        has_scopes=has_scopes(repo_config),
        rules=_build_rules(repo_config),
    )


def summarize_request(request: AnalysisRequest) -> str:
    """One-line description: "N files, M chars diff, K scopes detected"."""
    scopes = {f.scope for f in request.files if f.scope}
    return f"{len(request.files)} files, {len(request.diff)} chars diff, {len(scopes)} scopes detected"
