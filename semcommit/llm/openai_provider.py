"""OpenAI provider implementation.

Also the base for other OpenAI-compatible back-ends (Grok, Azure AI Foundry),
which only differ in how the client is constructed.
"""

from typing import Optional

import httpx
from openai import (
    APIError,
    APITimeoutError,
    AuthenticationError,
    OpenAI,
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


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat-completions LLM provider."""

    name = LLMProvider.OPENAI.value
    display_name = "OpenAI"
    base_url: Optional[str] = None

    def __init__(self, api_key: str, model: str | None = None):
        """Initialize the OpenAI provider.

        Args:
            api_key: The API key.
            model: The model to use. Defaults to the provider's default model.
        """
        super().__init__(model or DEFAULT_MODELS[LLMProvider(self.name)])
        self.api_key = api_key

    def _create_client(self):
        """Create the SDK client for this back-end."""
        return OpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def _request_model(self) -> str:
        """Model (or deployment) name sent with the request."""
        return self.model

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one chat-completions request.

        Raises:
            LLMTimeoutError: If the request exceeds the timeout.
            LLMAuthError: If the API key is rejected.
            LLMTransportError: For other API or network failures.
            LLMResponseParseError: If the reply is empty or was cut off.
        """
        client = self._create_client()

        try:
            response = client.chat.completions.create(
                model=self._request_model(),
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (APITimeoutError, httpx.TimeoutException) as e:
            raise LLMTimeoutError(f"{self.display_name} request timed out after {LLM_TIMEOUT_SECONDS}s") from e
        except (AuthenticationError, PermissionDeniedError) as e:
            raise LLMAuthError(f"{self.display_name} rejected the API key: {e}") from e
        except (APIError, httpx.HTTPError) as e:
            raise LLMTransportError(f"{self.display_name} API call failed: {e}") from e

        if not response.choices:
            raise LLMResponseParseError(f"{self.display_name} returned no choices")

        choice = response.choices[0]
        raw_response = choice.message.content or ""

        if choice.finish_reason == "length":
            raise LLMResponseParseError(f"{self.display_name} response was truncated (length limit reached)", raw_response)
        if not raw_response.strip():
            raise LLMResponseParseError(f"{self.display_name} returned an empty response")

        return raw_response
