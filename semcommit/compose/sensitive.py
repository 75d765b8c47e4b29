"""Sensitive file filtering.

Files matching SENSITIVE_PATTERNS are never committed, whatever the plan says.
"""

import fnmatch
import posixpath

from semcommit.models import CommitPlan


# Basename globs and path segments that mark a file as sensitive
SENSITIVE_PATTERNS = {
    "basenames": (
        ".env",
        ".env.local",
        ".env.production",
        "*.key",
        "*.pem",
        "*.p12",
        "id_rsa",
        "id_dsa",
        "id_ecdsa",
        "id_ed25519",
        "credentials",
        "secrets.yaml",
        "secrets.yml",
        "secret.json",
    ),
    "segments": (
        "/.ssh/",
        "/.aws/credentials",
    ),
}


def is_sensitive(path: str) -> bool:
    """Check whether a repo-relative path must never be committed.

    Args:
        path: Repo-relative path using forward slashes.

    Returns:
        True if the basename or a path segment matches SENSITIVE_PATTERNS.
    """
    normalized = path.replace("\\", "/")
    basename = posixpath.basename(normalized)

    for pattern in SENSITIVE_PATTERNS["basenames"]:
        if fnmatch.fnmatchcase(basename, pattern):
            return True

    # Leading slash so a top-level .ssh/ directory matches too
    rooted = "/" + normalized.lstrip("/")
    return any(segment in rooted for segment in SENSITIVE_PATTERNS["segments"])


def filter_sensitive_files(plan: CommitPlan) -> list[str]:
    """Drop sensitive files from every commit, in place.

    Commits left without files are removed from the plan.

    Args:
        plan: The plan to filter (modified in place).

    Returns:
        The removed paths, in plan order.
    """
    removed: list[str] = []
    kept_commits = []

    for commit in plan.commits:
        kept_files = []
        for path in commit.files:
            if is_sensitive(path):
                removed.append(path)
            else:
                kept_files.append(path)
        commit.files = kept_files
        if kept_files:
            kept_commits.append(commit)

    plan.commits = kept_commits
    return removed
