"""Git status parsing.

Contains:
- STATUS_ARGS: Arguments for the status call the parser expects
- parse_porcelain: Classify `git status --porcelain=v1 -z` output into a GitStatus
"""

from typing import Optional

from semcommit.models import GitStatus

# NUL-separated output keeps paths with spaces or quotes intact and lists
# every untracked file instead of collapsing untracked directories.
STATUS_ARGS = ["status", "--porcelain=v1", "-z", "--untracked-files=all"]


def _split_entries(output: str) -> list[tuple[str, str, str, str]]:
    """Split porcelain -z output into (index, worktree, path, source) tuples.

    Rename and copy entries carry the source path as an extra NUL-separated
    field after the destination. Other entries get an empty source.
    """
    fields = output.split("\0")
    entries = []
    i = 0
    while i < len(fields):
        field = fields[i]
        i += 1
        if len(field) < 4:
            continue
        index_status, worktree_status, path = field[0], field[1], field[3:]
        source = ""
        if index_status in ("R", "C") and i < len(fields):
            source = fields[i]
            i += 1
        entries.append((index_status, worktree_status, path, source))
    return entries


def parse_porcelain(output: str, ignored: Optional[set[str]] = None) -> GitStatus:
    """Parse porcelain status output.

    Classification per entry (first match wins):
    - "??": untracked
    - index A: added
    - index R or C: renamed
    - D in either column: deleted
    - anything else: modified

    An entry counts as staged when its index column is not blank and not "?".
    Staged renames also map their new path to the old one in `rename_sources`.

    Args:
        output: Raw output of `git status` run with STATUS_ARGS.
        ignored: Paths to drop (already known to be gitignored).

    Returns:
        GitStatus with paths in the order git emitted them.
    """
    ignored = ignored or set()
    status = GitStatus()

    for index_status, worktree_status, path, source in _split_entries(output):
        if path in ignored:
            continue

        if index_status == "?" and worktree_status == "?":
            status.untracked.append(path)
        elif index_status == "A":
            status.added.append(path)
        elif index_status in ("R", "C"):
            status.renamed.append(path)
            if index_status == "R" and source:
                status.rename_sources[path] = source
        elif index_status == "D" or worktree_status == "D":
            status.deleted.append(path)
        else:
            status.modified.append(path)

        if index_status not in (" ", "?"):
            status.staged.append(path)

    return status


def paths_in_porcelain(output: str) -> list[str]:
    """Return every path named in porcelain -z output, in order."""
    return [path for _, _, path, _ in _split_entries(output)]
