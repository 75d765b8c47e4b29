"""Built-in constants for semcommit.

User-editable settings live in ~/.commit-tool/.env (see user_config) and
per-repository settings in .commit.json (see repo_config).
"""

from enum import Enum


class LLMProvider(Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GROK = "grok"
    GEMINI = "gemini"
    AZURE_FOUNDRY = "azure-foundry"


# ============================================================
# PROVIDER DEFAULTS
# ============================================================

# Models used when COMMIT_MODEL is not set.
# Azure Foundry has no entry: it falls back to the deployment name.
DEFAULT_MODELS = {
    LLMProvider.ANTHROPIC: "claude-3-5-sonnet-20241022",
    LLMProvider.OPENAI: "gpt-4-turbo-preview",
    LLMProvider.GROK: "grok-beta",
    LLMProvider.GEMINI: "gemini-1.5-pro",
}

# Credential keys each provider needs in the user config file
CREDENTIAL_ENV_VARS = {
    LLMProvider.ANTHROPIC: ["ANTHROPIC_API_KEY"],
    LLMProvider.OPENAI: ["OPENAI_API_KEY"],
    LLMProvider.GROK: ["GROK_API_KEY"],
    LLMProvider.GEMINI: ["GEMINI_API_KEY"],
    LLMProvider.AZURE_FOUNDRY: [
        "AZURE_FOUNDRY_ENDPOINT",
        "AZURE_FOUNDRY_API_KEY",
        "AZURE_FOUNDRY_DEPLOYMENT",
    ],
}

GROK_BASE_URL = "https://api.x.ai/v1"
AZURE_FOUNDRY_API_VERSION = "2024-02-15-preview"

MAX_TOKENS = 2000
TEMPERATURE = 0.3
LLM_TIMEOUT_SECONDS = 60


# ============================================================
# CONTEXT AND RULES
# ============================================================

MAX_DIFF_CHARS = 4000
RECENT_COMMIT_COUNT = 10
MAX_MESSAGE_LENGTH = 50

DEFAULT_COMMIT_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "perf",
    "ci",
    "build",
    "revert",
]

BEHAVIORAL_TEST = "feat = behavior change, refactor = same behavior different structure"

VALID_MODES = ("smart", "single")


def supported_providers() -> list[str]:
    """Return provider names in declaration order."""
    return [p.value for p in LLMProvider]
