"""Google Gemini provider implementation."""

import httpx
from google import genai
from google.genai import errors, types

from semcommit.config import DEFAULT_MODELS, LLM_TIMEOUT_SECONDS, MAX_TOKENS, TEMPERATURE, LLMProvider
from semcommit.llm.base import BaseLLMProvider
from semcommit.llm.exceptions import (
    LLMAuthError,
    LLMResponseParseError,
    LLMTimeoutError,
    LLMTransportError,
)

# Gemini has no separate system role in this request shape
PROMPT_SEPARATOR = "\n\n---\n\n"


def _is_auth_error(error: errors.APIError) -> bool:
    """Gemini reports a bad key as 400 INVALID_ARGUMENT, not only 401/403."""
    if error.code in (401, 403):
        return True
    return error.code == 400 and "api key" in str(error).lower()


class GeminiProvider(BaseLLMProvider):
    """Google Gemini LLM provider."""

    name = LLMProvider.GEMINI.value

    def __init__(self, api_key: str, model: str | None = None):
        """Initialize the Gemini provider.

        Args:
            api_key: The Gemini API key.
            model: The model to use. Defaults to DEFAULT_MODELS[GEMINI].
        """
        super().__init__(model or DEFAULT_MODELS[LLMProvider.GEMINI])
        self.api_key = api_key

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send one generateContent request.

        Raises:
            LLMTimeoutError: If the request exceeds the timeout.
            LLMAuthError: If the API key is rejected.
            LLMTransportError: For other API or network failures.
            LLMResponseParseError: If the reply is empty, blocked or cut off.
        """
        client = genai.Client(
            api_key=self.api_key,
            # HttpOptions.timeout is in milliseconds
            http_options=types.HttpOptions(timeout=LLM_TIMEOUT_SECONDS * 1000),
        )
        full_prompt = f"{system_prompt}{PROMPT_SEPARATOR}{user_prompt}"

        try:
            response = client.models.generate_content(
                model=self.model,
                contents=full_prompt,
                config=types.GenerateContentConfig(
                    max_output_tokens=MAX_TOKENS,
                    temperature=TEMPERATURE,
                ),
            )
        except httpx.TimeoutException as e:
            raise LLMTimeoutError(f"Gemini request timed out after {LLM_TIMEOUT_SECONDS}s") from e
        except errors.APIError as e:
            if _is_auth_error(e):
                raise LLMAuthError(f"Gemini rejected the API key: {e}") from e
            raise LLMTransportError(f"Gemini API call failed: {e}") from e
        except httpx.HTTPError as e:
            raise LLMTransportError(f"Gemini API call failed: {e}") from e

        if not response.candidates:
            raise LLMResponseParseError("Gemini returned no candidates in response")

        raw_response = response.text or ""

        # Check finish reason - anything but a normal stop is suspicious
        finish_reason = str(getattr(response.candidates[0], "finish_reason", "") or "")
        if "SAFETY" in finish_reason:
            raise LLMResponseParseError(f"Gemini blocked the response: {finish_reason}", raw_response)
        if "MAX_TOKENS" in finish_reason:
            raise LLMResponseParseError("Gemini response was truncated (max tokens reached)", raw_response)

        if not raw_response.strip():
            raise LLMResponseParseError("Gemini returned an empty response")

        return raw_response
