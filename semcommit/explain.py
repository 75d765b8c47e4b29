"""Plain-language explanation of the changes to one file."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from semcommit.config import MAX_DIFF_CHARS
from semcommit.git import GitGateway, truncate_diff
from semcommit.llm import BaseLLMProvider
from semcommit.llm.prompts import EXPLAIN_SYSTEM_PROMPT, EXPLAIN_USER_PROMPT_TEMPLATE

logger = logging.getLogger(__name__)

NO_CHANGES_MESSAGE = "No changes detected in the specified file and range."


@dataclass
class RefRange:
    """Refs to compare; None stands for the working tree."""

    from_ref: Optional[str]
    to_ref: Optional[str]

    @property
    def description(self) -> str:
        if self.to_ref:
            return f"from {self.from_ref} to {self.to_ref}"
        if self.from_ref == "HEAD":
            return "uncommitted changes"
        return f"from {self.from_ref} to working copy"


def resolve_ref_range(from_ref: Optional[str] = None, to_ref: Optional[str] = None) -> RefRange:
    """Apply the ref defaults.

    No refs compares HEAD with the working tree, only --to implies
    --from HEAD, and only --from compares that ref with the working tree.
    """
    return RefRange(from_ref=from_ref or "HEAD", to_ref=to_ref or None)


def repo_relative_path(path: str, repo_root: Path, cwd: Optional[Path] = None) -> str:
    """Convert a path given on the command line to a repo-relative one.

    Paths outside the repository are returned unchanged so git can report them.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = (cwd or Path.cwd()) / candidate
    try:
        return candidate.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        return path


def explain_file_changes(
    gateway: GitGateway,
    provider: BaseLLMProvider,
    path: str,
    from_ref: Optional[str] = None,
    to_ref: Optional[str] = None,
) -> Optional[str]:
    """Ask the provider to explain one file's diff.

    Args:
        gateway: Gateway for the repository.
        provider: LLM provider to ask.
        path: Repo-relative file path.
        from_ref: Start ref (defaults to HEAD).
        to_ref: End ref (defaults to the working tree).

    Returns:
        The explanation, or None if the file has no changes in the range
        (the provider is not called).

    Raises:
        GitError: If a ref is invalid.
        LLMError: If the provider call fails.
    """
    refs = resolve_ref_range(from_ref, to_ref)

    diff = gateway.diff_between(path, refs.from_ref, refs.to_ref)
    if not diff.strip():
        logger.debug("No diff for %s (%s)", path, refs.description)
        return None

    entry = gateway.numstat_between(path, refs.from_ref, refs.to_ref)
    stats = entry.summary if entry else "unknown"

    user_prompt = EXPLAIN_USER_PROMPT_TEMPLATE.format(
        path=path,
        ref_range=refs.description,
        stats=stats,
        diff=truncate_diff(diff, MAX_DIFF_CHARS),
    )
    return provider.explain_diff(EXPLAIN_SYSTEM_PROMPT, user_prompt)
