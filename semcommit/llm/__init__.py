"""LLM provider module for semcommit.

This module provides a uniform interface over several LLM back-ends.
The provider is chosen from the user config (COMMIT_PROVIDER), optionally
overridden on the command line.
"""

from semcommit.config import LLMProvider
from semcommit.llm.base import BaseLLMProvider
from semcommit.llm.exceptions import (
    LLMAuthError,
    LLMError,
    LLMResponseParseError,
    LLMTimeoutError,
    LLMTransportError,
)
from semcommit.llm.parsing import parse_commit_plan, parse_json_response
from semcommit.user_config import UserConfig


def get_provider(config: UserConfig) -> BaseLLMProvider:
    """Get an LLM provider instance for the configured back-end.

    Args:
        config: The loaded user configuration (credentials already validated).

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    provider = config.provider
    model = config.model

    if provider == LLMProvider.ANTHROPIC:
        from semcommit.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(api_key=config.credential("ANTHROPIC_API_KEY"), model=model)

    elif provider == LLMProvider.OPENAI:
        from semcommit.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(api_key=config.credential("OPENAI_API_KEY"), model=model)

    elif provider == LLMProvider.GROK:
        from semcommit.llm.grok_provider import GrokProvider

        return GrokProvider(api_key=config.credential("GROK_API_KEY"), model=model)

    elif provider == LLMProvider.GEMINI:
        from semcommit.llm.google_provider import GeminiProvider

        return GeminiProvider(api_key=config.credential("GEMINI_API_KEY"), model=model)

    elif provider == LLMProvider.AZURE_FOUNDRY:
        from semcommit.llm.azure_foundry_provider import AzureFoundryProvider

        return AzureFoundryProvider(
            endpoint=config.credential("AZURE_FOUNDRY_ENDPOINT"),
            api_key=config.credential("AZURE_FOUNDRY_API_KEY"),
            deployment=config.credential("AZURE_FOUNDRY_DEPLOYMENT"),
            model=model,
        )

    else:
        raise ValueError(f"Unsupported provider: {provider}")


__all__ = [
    "BaseLLMProvider",
    "get_provider",
    # Exceptions
    "LLMError",
    "LLMTimeoutError",
    "LLMTransportError",
    "LLMAuthError",
    "LLMResponseParseError",
    # Parsing
    "parse_json_response",
    "parse_commit_plan",
]
