"""User prompt for commit planning.

Contains:
- COMMIT_USER_PROMPT_TEMPLATE: The user prompt template
- SINGLE_COMMIT_RULE: Extra rule appended in single-commit mode
- build_commit_prompts: Render (system, user) prompts for an AnalysisRequest
"""

from semcommit.llm.prompts.system import COMMIT_SYSTEM_PROMPT_TEMPLATE
from semcommit.models import AnalysisRequest, FileChange

COMMIT_USER_PROMPT_TEMPLATE = """Analyze these changes and create semantic commits.

FILES (status path [scope] [+added -removed]):
{files}

DIFF:
```diff
{diff}
```

RECENT COMMITS (newest first, for style reference):
{recent_commits}

RULES:
- Allowed types: {allowed_types}
- Max message length: {max_message_length} characters
- Has scopes: {has_scopes}
- Behavioral test: {behavioral_test}{single_commit_rule}

Return JSON only, no markdown code blocks."""

SINGLE_COMMIT_RULE = "\n- IMPORTANT: Create exactly ONE commit containing ALL files"


def _format_file(change: FileChange) -> str:
    scope = change.scope or "(no scope)"
    line = f"- {change.status} {change.path} [{scope}]"
    if change.diff_summary:
        line += f" [{change.diff_summary}]"
    return line


def _format_recent_commits(subjects: list[str]) -> str:
    if not subjects:
        return "(no recent commits)"
    return "\n".join(f"- {subject}" for subject in subjects)


def build_commit_prompts(request: AnalysisRequest) -> tuple[str, str]:
    """Render the system and user prompts for a planning request.

    Args:
        request: The analysis request.

    Returns:
        Tuple of (system_prompt, user_prompt).
    """
    allowed = " | ".join(request.rules.types)

    system = COMMIT_SYSTEM_PROMPT_TEMPLATE.format(
        allowed_types=allowed,
        max_message_length=request.rules.max_message_length,
        behavioral_test=request.rules.behavioral_test,
    )

    user = COMMIT_USER_PROMPT_TEMPLATE.format(
        files="\n".join(_format_file(f) for f in request.files),
        diff=request.diff or "(no textual diff)",
        recent_commits=_format_recent_commits(request.recent_commits),
        allowed_types=allowed,
        max_message_length=request.rules.max_message_length,
        has_scopes="true" if request.has_scopes else "false",
        behavioral_test=request.rules.behavioral_test,
        single_commit_rule=SINGLE_COMMIT_RULE if request.single_commit else "",
    )

    return system, user
