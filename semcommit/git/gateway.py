"""Repository gateway.

GitGateway wraps every git subprocess semcommit runs against one repository:
status, diffs, recent history, staging, committing, resetting and remote
reachability checks. Failures surface as GitError carrying git's stderr.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from semcommit.git.diff import NumstatEntry, parse_numstat
from semcommit.git.exceptions import GitError, InsufficientHistoryError
from semcommit.git.runner import _run_git_command, get_repo_root
from semcommit.git.status import STATUS_ARGS, parse_porcelain, paths_in_porcelain
from semcommit.models import GitStatus

logger = logging.getLogger(__name__)

RESET_MODES = ("mixed", "soft", "hard")


class GitGateway:
    """Git operations scoped to a single repository root."""

    def __init__(self, repo_root: Union[str, Path]):
        self.repo_root = Path(repo_root)

    @classmethod
    def find(cls, cwd: Optional[Union[str, Path]] = None) -> "GitGateway":
        """Create a gateway for the repository enclosing `cwd`.

        Raises:
            NotARepositoryError: If `cwd` is not inside a git work tree.
        """
        return cls(get_repo_root(cwd))

    def _git(self, args: list[str], **kwargs) -> str:
        return _run_git_command(args, cwd=self.repo_root, **kwargs)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def status(self) -> GitStatus:
        """Return the working-tree status, excluding gitignored paths.

        Returns:
            GitStatus with paths in the order git emitted them.
        """
        output = self._git(STATUS_ARGS)
        ignored = self._ignored_paths(paths_in_porcelain(output))
        return parse_porcelain(output, ignored=ignored)

    def _ignored_paths(self, paths: list[str]) -> set[str]:
        """Batch-check paths against .gitignore.

        Paths travel NUL-separated in both directions.
        Exit code 1 from check-ignore means nothing matched. Any other failure
        keeps every path.
        """
        if not paths:
            return set()
        try:
            output = self._git(
                ["check-ignore", "-z", "--stdin"],
                ok_returncodes=(0, 1),
                input_text="\0".join(paths) + "\0",
            )
        except GitError as e:
            logger.debug("check-ignore failed, keeping all paths: %s", e)
            return set()
        return {path for path in output.split("\0") if path}

    def has_head(self) -> bool:
        """Return True if the repository has at least one commit."""
        try:
            self._git(["rev-parse", "--verify", "--quiet", "HEAD"])
            return True
        except GitError:
            return False

    def head_commit(self) -> Optional[str]:
        """Return the short hash of HEAD, or None before the first commit."""
        try:
            return self._git(["rev-parse", "--verify", "--quiet", "--short", "HEAD"]) or None
        except GitError:
            return None

    def _diff_bases(self, staged_only: bool) -> list[list[str]]:
        """Return the diff invocations that cover the requested changes.

        Staged-only compares the index with HEAD. Otherwise the working tree
        is compared with HEAD, or, before the first commit, the index and the
        working tree are diffed separately.
        """
        if staged_only:
            return [["--staged"]]
        if self.has_head():
            return [["HEAD"]]
        return [["--staged"], []]

    def diff(
        self,
        staged_only: bool = False,
        paths: Optional[list[str]] = None,
        untracked: Optional[list[str]] = None,
    ) -> str:
        """Return unified diff text.

        Args:
            staged_only: Restrict to the index (`git diff --staged`).
            paths: Limit to these paths. When omitted and not staged_only,
                untracked files are appended as new-file diffs.
            untracked: Untracked paths already known to the caller (saves a
                second status call).

        Returns:
            The diff text (empty if there are no changes).
        """
        pathspec = ["--"] + list(paths) if paths else []
        parts = [
            self._git(["diff"] + base + pathspec, ok_returncodes=(0, 1))
            for base in self._diff_bases(staged_only)
        ]
        text = "\n".join(part for part in parts if part)

        if not staged_only and not paths:
            if untracked is None:
                untracked = self.status().untracked
            new_file_diffs = [self.new_file_diff(path) for path in untracked]
            text = "\n".join(part for part in [text] + new_file_diffs if part)

        return text

    def new_file_diff(self, path: str) -> str:
        """Render an untracked file as a diff against /dev/null."""
        # --no-index exits 1 when the files differ
        return self._git(
            ["diff", "--no-index", "--", "/dev/null", path],
            ok_returncodes=(0, 1),
        )

    def diff_numstat(self, staged_only: bool = False) -> dict[str, NumstatEntry]:
        """Return per-file line counts.

        Args:
            staged_only: Restrict to the index.

        Returns:
            Mapping of path to NumstatEntry.
        """
        result = {}
        for base in self._diff_bases(staged_only):
            output = self._git(["diff", "--numstat", "-z", "--no-renames"] + base, ok_returncodes=(0, 1))
            result.update(parse_numstat(output))
        return result

    def diff_between(self, path: str, from_ref: Optional[str], to_ref: Optional[str]) -> str:
        """Return the diff of one path between refs (None means working tree)."""
        args = ["diff"]
        if from_ref:
            args.append(from_ref)
        if to_ref:
            args.append(to_ref)
        args += ["--", path]
        return self._git(args, ok_returncodes=(0, 1))

    def numstat_between(self, path: str, from_ref: Optional[str], to_ref: Optional[str]) -> Optional[NumstatEntry]:
        """Return line counts for one path between refs, or None if unchanged."""
        args = ["diff", "--numstat", "-z", "--no-renames"]
        if from_ref:
            args.append(from_ref)
        if to_ref:
            args.append(to_ref)
        args += ["--", path]
        entries = parse_numstat(self._git(args, ok_returncodes=(0, 1)))
        return next(iter(entries.values()), None)

    def recent_commits(self, count: int) -> list[str]:
        """Return up to `count` recent commit subjects, newest first.

        A repository without commits yields an empty list.
        """
        if count <= 0:
            return []
        if not self.has_head():
            return []
        output = self._git(["log", "--format=%s", f"-{count}"])
        return [line for line in output.splitlines() if line.strip()]

    def commit_count(self) -> int:
        """Return the number of commits reachable from HEAD (0 if none)."""
        try:
            return int(self._git(["rev-list", "--count", "HEAD"]) or 0)
        except (GitError, ValueError):
            return 0

    def ensure_commit_depth(self, count: int) -> None:
        """Check that HEAD~count exists.

        Raises:
            InsufficientHistoryError: If fewer than count+1 commits exist.
        """
        try:
            self._git(["rev-parse", "--verify", "--quiet", f"HEAD~{count}"])
        except GitError:
            raise InsufficientHistoryError(count, self.commit_count())

    def was_pushed(self, ref: str = "HEAD") -> bool:
        """Return True if `ref` is reachable from any remote-tracking branch.

        A failing check (no remotes, unknown ref) counts as not pushed.
        """
        try:
            output = self._git(["branch", "-r", "--contains", ref])
        except GitError:
            return False
        return bool(output.strip())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, paths: list[str]) -> None:
        """Stage exactly the given paths (including deletions)."""
        if not paths:
            raise GitError("No files to stage.")
        self._git(["add", "--all", "--"] + list(paths))

    def commit(self, message: str, body: Optional[str] = None) -> str:
        """Record the index as a commit.

        Args:
            message: The subject line.
            body: Optional body, separated from the subject by a blank line.

        Returns:
            The short hash of the new commit.
        """
        args = ["commit", "-m", message]
        if body:
            args += ["-m", body]
        self._git(args)
        commit_hash = self._git(["rev-parse", "--short", "HEAD"])
        logger.debug("Created commit %s: %s", commit_hash, message)
        return commit_hash

    def reset(self, mode: str = "mixed", ref: str = "HEAD") -> None:
        """Run `git reset --<mode> <ref>`.

        Raises:
            ValueError: If mode is not mixed, soft or hard.
        """
        if mode not in RESET_MODES:
            raise ValueError(f"Invalid reset mode: {mode}")
        self._git(["reset", "--quiet", f"--{mode}", ref])

    def unstage_all(self) -> None:
        """Clear the index so only explicitly added paths get committed.

        Without a HEAD there is nothing to reset to, so cached entries are
        removed instead.
        """
        if self.has_head():
            self.reset("mixed", "HEAD")
        else:
            self._git(["rm", "--cached", "-r", "--quiet", "--ignore-unmatch", "."])
