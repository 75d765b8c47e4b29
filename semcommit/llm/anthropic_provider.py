"""Anthropic Claude provider implementation."""

import httpx
from anthropic import (
    Anthropic,
    APIError,
    APITimeoutError,
    AuthenticationError,
    PermissionDeniedError,
)

from semcommit.config import DEFAULT_MODELS, LLM_TIMEOUT_SECONDS, MAX_TOKENS, TEMPERATURE, LLMProvider
from semcommit.llm.base import BaseLLMProvider
from semcommit.llm.exceptions import (
    LLMAuthError,
    LLMResponseParseError,
    LLMTimeoutError,
    LLMTransportError,
)


class AnthropicProvider(BaseLLMProvider):
    """Anthropic Claude LLM provider."""

    name = LLMProvider.ANTHROPIC.value

    def __init__(self, api_key: str, model: str | None = None):
        """Initialize the Anthropic provider.

        Args:
            api_key: The Anthropic API key.
            model: The model to use. Defaults to DEFAULT_MODELS[ANTHROPIC].
        """
        super().__init__(model or DEFAULT_MODELS[LLMProvider.ANTHROPIC])
        self.api_key = api_key

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one Messages API request.

        Raises:
            LLMTimeoutError: If the request exceeds the timeout.
            LLMAuthError: If the API key is rejected.
            LLMTransportError: For other API or network failures.
            LLMResponseParseError: If the reply is empty or was cut off.
        """
        client = Anthropic(
            api_key=self.api_key,
            timeout=LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )

        try:
            message = client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except (APITimeoutError, httpx.TimeoutException) as e:
            raise LLMTimeoutError(f"Anthropic request timed out after {LLM_TIMEOUT_SECONDS}s") from e
        except (AuthenticationError, PermissionDeniedError) as e:
            raise LLMAuthError(f"Anthropic rejected the API key: {e}") from e
        except (APIError, httpx.HTTPError) as e:
            raise LLMTransportError(f"Anthropic API call failed: {e}") from e

        # Extract the text blocks
        raw_response = "".join(
            getattr(block, "text", "") for block in (message.content or [])
        )

        if message.stop_reason == "max_tokens":
            raise LLMResponseParseError("Anthropic response was truncated (max_tokens reached)", raw_response)
        if not raw_response.strip():
            raise LLMResponseParseError("Anthropic returned an empty response")

        return raw_response
