"""Git diff helpers.

Contains:
- NumstatEntry: Added/removed line counts for one file
- parse_numstat: Parse `git diff --numstat -z` output
- truncate_diff: Bound diff text to a byte budget without splitting characters
- TRUNCATION_MARKER: Marker appended to truncated diffs
"""

from dataclasses import dataclass

TRUNCATION_MARKER = "\n...(truncated)\n"


@dataclass
class NumstatEntry:
    """Line counts for one file ("binary" for binary files)."""

    added: str
    removed: str

    @property
    def summary(self) -> str:
        """Compact "+A -D" rendering."""
        return f"+{self.added} -{self.removed}"


def parse_numstat(output: str) -> dict[str, NumstatEntry]:
    """Parse `git diff --numstat -z --no-renames` output into a path lookup.

    Paths are taken verbatim, so non-ASCII names match the status output.

    Args:
        output: NUL-terminated "added<TAB>removed<TAB>path" records.

    Returns:
        Mapping of path to NumstatEntry. Binary files ("-") get "binary" counts.
    """
    result = {}
    for record in output.split("\0"):
        parts = record.split("\t", 2)
        if len(parts) != 3:
            continue
        added, removed, path = parts
        result[path] = NumstatEntry(
            added="binary" if added == "-" else added,
            removed="binary" if removed == "-" else removed,
        )
    return result


def truncate_diff(text: str, limit: int) -> str:
    """Bound a diff to `limit` UTF-8 bytes.

    Text that already fits is returned unchanged. Otherwise the first `limit`
    bytes are kept (dropping any partial multi-byte character at the cut) and
    TRUNCATION_MARKER is appended. Applying this twice gives the same result
    as applying it once.

    Args:
        text: The diff text.
        limit: Maximum number of bytes of diff content to keep.

    Returns:
        The possibly truncated diff.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text

    if text.endswith(TRUNCATION_MARKER):
        body = text[: -len(TRUNCATION_MARKER)]
        if len(body.encode("utf-8")) <= limit:
            return text

    cut = encoded[:limit].decode("utf-8", errors="ignore")
    return cut + TRUNCATION_MARKER
