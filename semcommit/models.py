"""Data models for semcommit.

Contains:
- FileChange: One working-tree delta handed to the LLM
- GitStatus: Parsed porcelain status, grouped by change kind
- CommitRules: Hard rules included in the prompt
- AnalysisRequest: Everything the LLM sees for one planning run
- PlannedCommit: A single commit proposed by the LLM
- CommitPlan: The ordered list of proposed commits
- ExecutedCommit: A planned commit after it has been materialized
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator


# Regex to match conventional commit prefix: type(scope): or type:
_CONVENTIONAL_PREFIX_RE = re.compile(
    r"^(?P<type>[a-zA-Z]+)"          # type (e.g., feat, fix, refactor)
    r"(?:\((?P<scope>[^)]*)\))?"     # optional (scope)
    r"!?:\s*"                         # optional breaking marker, colon + space
)

# Change kinds a FileChange may carry
STATUS_ADDED = "added"
STATUS_MODIFIED = "modified"
STATUS_DELETED = "deleted"
STATUS_RENAMED = "renamed"


@dataclass
class FileChange:
    """One working-tree delta."""

    path: str
    status: str
    scope: str = ""
    diff_summary: str = ""


@dataclass
class GitStatus:
    """Porcelain status grouped by change kind, in the order git emitted it."""

    staged: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    # New path -> old path for staged renames
    rename_sources: dict[str, str] = field(default_factory=dict)

    @property
    def all_files(self) -> list[str]:
        """Every changed path once, grouped modified/added/deleted/renamed/untracked."""
        seen = set()
        result = []
        for group in (self.modified, self.added, self.deleted, self.renamed, self.untracked):
            for path in group:
                if path not in seen:
                    seen.add(path)
                    result.append(path)
        return result

    def status_of(self, path: str) -> str:
        """Return the change kind for a path (untracked counts as added)."""
        if path in self.deleted:
            return STATUS_DELETED
        if path in self.renamed:
            return STATUS_RENAMED
        if path in self.added or path in self.untracked:
            return STATUS_ADDED
        return STATUS_MODIFIED


@dataclass
class CommitRules:
    """Rules block sent with every request."""

    types: list[str]
    max_message_length: int
    behavioral_test: str


@dataclass
class AnalysisRequest:
    """Input for one LLM planning call."""

    files: list[FileChange]
    diff: str
    recent_commits: list[str]
    has_scopes: bool
    rules: CommitRules
    single_commit: bool = False
    # Old paths of renamed files, staged together with the new path
    rename_sources: dict[str, str] = field(default_factory=dict)

    @property
    def paths(self) -> list[str]:
        """Paths of the working set, in request order."""
        return [f.path for f in self.files]


class PlannedCommit(BaseModel):
    """A single commit in the plan returned by the LLM."""

    type: str
    scope: Optional[str] = None
    message: str
    files: list[str] = []
    body: Optional[str] = None
    reasoning: Optional[str] = None

    @field_validator("type", "message", mode="before")
    @classmethod
    def strip_text(cls, value):
        """Trim surrounding whitespace from text fields."""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("scope", "body", mode="before")
    @classmethod
    def empty_to_none(cls, value):
        """Normalize blank optional fields to None."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @model_validator(mode="after")
    def strip_conventional_prefix_from_message(self) -> "PlannedCommit":
        """Strip a duplicated "type(scope): " prefix from the message.

        Models sometimes repeat the type and scope inside the message even though
        they are separate JSON fields.
        """
        if self.type and self.message:
            match = _CONVENTIONAL_PREFIX_RE.match(self.message)
            if match and match.group("type").lower() == self.type.lower():
                self.message = self.message[match.end():]
        return self

    @property
    def subject(self) -> str:
        """The rendered subject line: type(scope): message or type: message."""
        if self.scope:
            return f"{self.type}({self.scope}): {self.message}"
        return f"{self.type}: {self.message}"


class CommitPlan(BaseModel):
    """Ordered sequence of planned commits."""

    commits: list[PlannedCommit] = []

    @property
    def files(self) -> list[str]:
        """All referenced paths across commits, duplicates included."""
        return [path for commit in self.commits for path in commit.files]


@dataclass
class ExecutedCommit:
    """A planned commit with the hash it was created under (empty in dry-run)."""

    planned: PlannedCommit
    hash: str = ""

    @property
    def subject(self) -> str:
        return self.planned.subject

    @property
    def files(self) -> list[str]:
        return self.planned.files
