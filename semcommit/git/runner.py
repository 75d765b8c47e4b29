"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Union

from semcommit.git.exceptions import GitError, NotARepositoryError

logger = logging.getLogger(__name__)


def _run_git_command(
    args: list[str],
    cwd: Optional[Union[str, Path]] = None,
    ok_returncodes: tuple[int, ...] = (0,),
    input_text: Optional[str] = None,
) -> str:
    """Run a git command and return its output.

    Output is decoded as UTF-8 with undecodable bytes replaced by U+FFFD.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run in (defaults to the process working directory).
        ok_returncodes: Exit codes treated as success. Some git commands use
            exit code 1 to mean "nothing found" rather than failure.
        input_text: Optional text fed to the command's stdin.

    Returns:
        The stdout of the git command with trailing whitespace removed.

    Raises:
        GitError: If the command fails.
    """
    logger.debug("git %s", " ".join(args))
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=True,
            cwd=cwd,
            input=input_text,
        )
        return (result.stdout or "").rstrip()
    except subprocess.CalledProcessError as e:
        if e.returncode in ok_returncodes:
            return (e.stdout or "").rstrip()
        stderr = (e.stderr or "").strip()
        raise GitError(
            f"Git command failed: git {' '.join(args)}\n{stderr}",
            stderr=stderr,
            returncode=e.returncode,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def get_repo_root(cwd: Optional[Union[str, Path]] = None) -> Path:
    """Get the root directory of the enclosing git repository.

    Args:
        cwd: Directory to start from (defaults to the process working directory).

    Returns:
        Path to the repository root.

    Raises:
        NotARepositoryError: If not in a git repository.
        GitError: If git itself is unavailable.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
    except GitError as e:
        if e.returncode is None:
            raise
        raise NotARepositoryError(
            "Not in a git repository. Please run this command from within a git repo.",
            stderr=e.stderr,
            returncode=e.returncode,
        )
    return Path(root)
