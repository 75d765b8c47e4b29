"""xAI Grok provider implementation.

Grok exposes an OpenAI-compatible chat-completions API.
"""

from semcommit.config import GROK_BASE_URL, LLMProvider
from semcommit.llm.openai_provider import OpenAIProvider


class GrokProvider(OpenAIProvider):
    """xAI Grok LLM provider."""

    name = LLMProvider.GROK.value
    display_name = "Grok"
    base_url = GROK_BASE_URL
