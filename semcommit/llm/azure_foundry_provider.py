"""Azure AI Foundry provider implementation.

Requests go to {endpoint}/openai/deployments/{deployment}/chat/completions
with an `api-key` header, which is what the SDK's AzureOpenAI client does.
"""

from openai import AzureOpenAI

from semcommit.config import AZURE_FOUNDRY_API_VERSION, LLM_TIMEOUT_SECONDS, LLMProvider
from semcommit.llm.base import BaseLLMProvider
from semcommit.llm.openai_provider import OpenAIProvider


class AzureFoundryProvider(OpenAIProvider):
    """Azure-hosted OpenAI-compatible deployment."""

    name = LLMProvider.AZURE_FOUNDRY.value
    display_name = "Azure AI Foundry"

    def __init__(self, endpoint: str, api_key: str, deployment: str, model: str | None = None):
        """Initialize the Azure AI Foundry provider.

        Args:
            endpoint: Resource endpoint, e.g. https://my-resource.openai.azure.com
            api_key: The resource API key.
            deployment: The deployment name requests are routed to.
            model: Reported model name. Defaults to the deployment name.
        """
        self.endpoint = endpoint.rstrip("/")
        self.deployment = deployment
        self.api_key = api_key
        BaseLLMProvider.__init__(self, model or deployment)

    def _create_client(self):
        return AzureOpenAI(
            azure_endpoint=self.endpoint,
            api_key=self.api_key,
            api_version=AZURE_FOUNDRY_API_VERSION,
            timeout=LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )

    def _request_model(self) -> str:
        return self.deployment
