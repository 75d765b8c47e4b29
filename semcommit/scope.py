"""Scope resolution for semcommit.

Maps each changed file to the monorepo sub-project it belongs to, using the
scopes declared in .commit.json. The most specific (longest) matching path
prefix wins; scopes are pre-sorted by prefix length when the repo config
is loaded, so the first match is the longest one.
"""

from typing import Optional

from semcommit.repo_config import RepoConfig


def normalize_path(path: str) -> str:
    """Normalize a file path for consistent processing.

    Args:
        path: The file path to normalize.

    Returns:
        Normalized path with forward slashes.
    """
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.lstrip("/")


def resolve_scope(path: str, config: Optional[RepoConfig]) -> str:
    """Return the scope name for a file path.

    Args:
        path: Repo-relative file path.
        config: The loaded repo config, or None when there is none.

    Returns:
        The scope bound to the longest matching prefix, else the default
        scope, else an empty string.
    """
    if config is None:
        return ""

    normalized = normalize_path(path)
    for mapping in config.scopes:
        if normalized.startswith(mapping.path):
            return mapping.scope

    return config.default_scope or ""


def resolve_scopes(paths: list[str], config: Optional[RepoConfig]) -> dict[str, str]:
    """Resolve scopes for several paths at once.

    Args:
        paths: Repo-relative file paths.
        config: The loaded repo config, or None.

    Returns:
        Mapping of path to scope name (possibly empty).
    """
    return {path: resolve_scope(path, config) for path in paths}
