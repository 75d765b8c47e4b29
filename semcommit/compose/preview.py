"""Plain-text rendering of a commit plan."""

from semcommit.models import CommitPlan


def preview_plan(plan: CommitPlan) -> str:
    """Render the plan as a numbered list with files under each commit.

    Example:
        📋 2 commits planned:

        [1/2] feat(api): add handler endpoint
            └─ src/api/handler.go

        [2/2] chore: add configuration
            └─ config.yaml
    """
    total = len(plan.commits)
    noun = "commit" if total == 1 else "commits"
    lines = [f"📋 {total} {noun} planned:"]

    for i, commit in enumerate(plan.commits, 1):
        lines.append("")
        lines.append(f"[{i}/{total}] {commit.subject}")
        for path in commit.files:
            lines.append(f"    └─ {path}")

    return "\n".join(lines)
