"""Plan validation for semcommit.

Contains:
- PlanValidationError: Exception carrying every validation reason
- ValidationResult: Outcome of validate_plan
- validate_plan: Check a plan against the working set and repo config
"""

import logging
import posixpath
from dataclasses import dataclass, field
from typing import Iterable, Optional

from semcommit.compose.sensitive import is_sensitive
from semcommit.config import MAX_MESSAGE_LENGTH
from semcommit.models import CommitPlan
from semcommit.repo_config import RepoConfig, allowed_types, default_repo_config, has_scopes, scope_names

logger = logging.getLogger(__name__)


class PlanValidationError(Exception):
    """Raised when a plan fails validation."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        lines = "\n".join(f"  - {error}" for error in self.errors)
        super().__init__(f"plan validation failed:\n{lines}")


@dataclass
class ValidationResult:
    """Validation outcome with every reason found."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def _error(field_name: str, message: str) -> str:
    return f"validation error in {field_name}: {message}"


def _is_unsafe_path(path: str) -> bool:
    """Absolute paths and paths with a ".." segment escape the repository."""
    normalized = path.replace("\\", "/")
    if posixpath.isabs(normalized) or (len(normalized) > 1 and normalized[1] == ":"):
        return True
    return ".." in normalized.split("/")


def validate_plan(
    plan: CommitPlan,
    working_set: Iterable[str],
    repo_config: Optional[RepoConfig] = None,
    single_commit: bool = False,
) -> ValidationResult:
    """Validate a plan before sensitive filtering and execution.

    All checks run; errors accumulate instead of stopping at the first one.
    A working set made only of sensitive files needs no commits at all, so
    dropping sensitive-only commits from a valid plan keeps it valid.

    Args:
        plan: The unfiltered plan returned by the LLM.
        working_set: Paths the run intends to commit.
        repo_config: Repo config (defaults when None).
        single_commit: Require exactly one commit with non-sensitive files.

    Returns:
        ValidationResult listing every defect.
    """
    repo_config = repo_config or default_repo_config()
    working_set = list(working_set)
    known_paths = set(working_set)
    errors: list[str] = []

    # Sensitive files are filtered out later, so they need no coverage
    expected = [path for path in working_set if not is_sensitive(path)]

    if not plan.commits and expected:
        errors.append(_error("commits", "plan has no commits"))

    types = allowed_types(repo_config)
    check_scopes = has_scopes(repo_config)
    legal_scopes = set(scope_names(repo_config))
    if repo_config.default_scope:
        legal_scopes.add(repo_config.default_scope)

    seen: dict[str, int] = {}
    for i, commit in enumerate(plan.commits):
        prefix = f"commits[{i}]"

        if commit.type not in types:
            errors.append(
                _error(f"{prefix}.type", f"type '{commit.type}' is not allowed (allowed: {', '.join(types)})")
            )

        message = commit.message
        if not message:
            errors.append(_error(f"{prefix}.message", "message is empty"))
        elif "\n" in message or "\r" in message:
            errors.append(_error(f"{prefix}.message", "message must be a single line"))
        elif len(message) > MAX_MESSAGE_LENGTH:
            errors.append(
                _error(
                    f"{prefix}.message",
                    f"message is {len(message)} characters (max {MAX_MESSAGE_LENGTH})",
                )
            )

        if not commit.files:
            errors.append(_error(f"{prefix}.files", "commit has no files"))

        for path in commit.files:
            if _is_unsafe_path(path):
                errors.append(_error(f"{prefix}.files", f"path '{path}' must be relative to the repository root"))
            elif path not in known_paths:
                errors.append(_error(f"{prefix}.files", f"file '{path}' is not in the working set"))

            if path in seen:
                errors.append(
                    _error(f"{prefix}.files", f"file '{path}' already appears in commits[{seen[path]}]")
                )
            else:
                seen[path] = i

        if check_scopes and commit.scope and commit.scope not in legal_scopes:
            errors.append(
                _error(
                    f"{prefix}.scope",
                    f"scope '{commit.scope}' is not configured (allowed: {', '.join(sorted(legal_scopes))})",
                )
            )

    for path in expected:
        if path not in seen:
            errors.append(_error("files", f"file '{path}' is not included in any commit"))

    if single_commit and expected:
        committing = [c for c in plan.commits if any(not is_sensitive(p) for p in c.files)]
        if len(committing) != 1:
            errors.append(
                _error("commits", f"single-commit mode requires exactly 1 commit, got {len(committing)}")
            )

    logger.debug("Plan validation found %d errors", len(errors))
    return ValidationResult(valid=not errors, errors=errors)
