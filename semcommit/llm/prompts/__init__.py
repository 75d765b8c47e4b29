"""LLM prompt templates.

This package contains the prompts semcommit sends to providers:
- system: The commit-planning system prompt (rules filled in per request)
- commit: The commit-planning user prompt and build_commit_prompts
- explain: Prompts for single-file diff explanations
"""

from semcommit.llm.prompts.system import COMMIT_SYSTEM_PROMPT_TEMPLATE
from semcommit.llm.prompts.commit import (
    COMMIT_USER_PROMPT_TEMPLATE,
    SINGLE_COMMIT_RULE,
    build_commit_prompts,
)
from semcommit.llm.prompts.explain import (
    EXPLAIN_SYSTEM_PROMPT,
    EXPLAIN_USER_PROMPT_TEMPLATE,
)


__all__ = [
    # Commit planning
    "COMMIT_SYSTEM_PROMPT_TEMPLATE",
    "COMMIT_USER_PROMPT_TEMPLATE",
    "SINGLE_COMMIT_RULE",
    "build_commit_prompts",
    # Diff explanation
    "EXPLAIN_SYSTEM_PROMPT",
    "EXPLAIN_USER_PROMPT_TEMPLATE",
]
