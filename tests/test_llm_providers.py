"""Tests for the concrete LLM providers and get_provider."""

from unittest.mock import MagicMock

import anthropic
import httpx
import openai
import pytest

from semcommit.config import DEFAULT_MODELS, GROK_BASE_URL, LLM_TIMEOUT_SECONDS, LLMProvider
from semcommit.llm import (
    LLMAuthError,
    LLMResponseParseError,
    LLMTimeoutError,
    LLMTransportError,
    get_provider,
)
from semcommit.llm.anthropic_provider import AnthropicProvider
from semcommit.llm.azure_foundry_provider import AzureFoundryProvider
from semcommit.llm.google_provider import GeminiProvider, _is_auth_error
from semcommit.llm.grok_provider import GrokProvider
from semcommit.llm.openai_provider import OpenAIProvider
from semcommit.user_config import UserConfig

REQUEST = httpx.Request("POST", "https://api.example.com/v1")


def _status_response(code: int) -> httpx.Response:
    return httpx.Response(code, request=REQUEST)


class TestGetProvider:
    """Tests for get_provider function."""

    @pytest.mark.parametrize(
        "provider,env_var,expected",
        [
            (LLMProvider.ANTHROPIC, "ANTHROPIC_API_KEY", AnthropicProvider),
            (LLMProvider.OPENAI, "OPENAI_API_KEY", OpenAIProvider),
            (LLMProvider.GROK, "GROK_API_KEY", GrokProvider),
            (LLMProvider.GEMINI, "GEMINI_API_KEY", GeminiProvider),
        ],
    )
    def test_provider_classes(self, provider, env_var, expected):
        """Test each provider maps to its implementation with the default model."""
        config = UserConfig(provider=provider, credentials={env_var: "key"})

        llm = get_provider(config)

        assert type(llm) is expected
        assert llm.api_key == "key"
        assert llm.model == DEFAULT_MODELS[provider]

    def test_model_override(self):
        """Test COMMIT_MODEL replaces the default model."""
        config = UserConfig(
            provider=LLMProvider.OPENAI,
            model="gpt-4o",
            credentials={"OPENAI_API_KEY": "key"},
        )

        assert get_provider(config).model == "gpt-4o"

    def test_azure_foundry(self):
        """Test Azure uses the deployment as its model name."""
        config = UserConfig(
            provider=LLMProvider.AZURE_FOUNDRY,
            credentials={
                "AZURE_FOUNDRY_ENDPOINT": "https://res.openai.azure.com/",
                "AZURE_FOUNDRY_API_KEY": "key",
                "AZURE_FOUNDRY_DEPLOYMENT": "my-gpt",
            },
        )

        llm = get_provider(config)

        assert isinstance(llm, AzureFoundryProvider)
        assert llm.model == "my-gpt"
        assert llm.endpoint == "https://res.openai.azure.com"

    def test_unsupported(self):
        """Test an unknown provider value raises ValueError."""
        config = UserConfig(provider="ollama")

        with pytest.raises(ValueError, match="Unsupported provider"):
            get_provider(config)


class TestAnthropicProvider:
    """Tests for AnthropicProvider.complete."""

    @pytest.fixture
    def client(self, mocker):
        mock_cls = mocker.patch("semcommit.llm.anthropic_provider.Anthropic")
        return mock_cls

    def _message(self, text, stop_reason="end_turn"):
        message = MagicMock()
        message.content = [MagicMock(text=text)]
        message.stop_reason = stop_reason
        return message

    def test_returns_text(self, client):
        """Test the text blocks are returned."""
        client.return_value.messages.create.return_value = self._message('{"commits": []}')

        result = AnthropicProvider(api_key="key").complete("sys", "user")

        assert result == '{"commits": []}'
        client.assert_called_once_with(api_key="key", timeout=LLM_TIMEOUT_SECONDS, max_retries=0)
        kwargs = client.return_value.messages.create.call_args.kwargs
        assert kwargs["system"] == "sys"
        assert kwargs["messages"] == [{"role": "user", "content": "user"}]
        assert kwargs["model"] == DEFAULT_MODELS[LLMProvider.ANTHROPIC]

    def test_truncated(self, client):
        """Test max_tokens stop reason is a parse error."""
        client.return_value.messages.create.return_value = self._message('{"commits": [', "max_tokens")

        with pytest.raises(LLMResponseParseError, match="truncated"):
            AnthropicProvider(api_key="key").complete("sys", "user")

    def test_empty(self, client):
        """Test an empty reply is a parse error."""
        client.return_value.messages.create.return_value = self._message("   ")

        with pytest.raises(LLMResponseParseError, match="empty"):
            AnthropicProvider(api_key="key").complete("sys", "user")

    def test_timeout(self, client):
        """Test SDK timeouts map to LLMTimeoutError."""
        client.return_value.messages.create.side_effect = anthropic.APITimeoutError(REQUEST)

        with pytest.raises(LLMTimeoutError):
            AnthropicProvider(api_key="key").complete("sys", "user")

    def test_auth(self, client):
        """Test a 401 maps to LLMAuthError."""
        client.return_value.messages.create.side_effect = anthropic.AuthenticationError(
            "invalid x-api-key", response=_status_response(401), body=None
        )

        with pytest.raises(LLMAuthError):
            AnthropicProvider(api_key="bad").complete("sys", "user")

    def test_server_error(self, client):
        """Test other API errors map to LLMTransportError."""
        client.return_value.messages.create.side_effect = anthropic.InternalServerError(
            "overloaded", response=_status_response(529), body=None
        )

        with pytest.raises(LLMTransportError):
            AnthropicProvider(api_key="key").complete("sys", "user")

    def test_connection_error(self, client):
        """Test network failures map to LLMTransportError."""
        client.return_value.messages.create.side_effect = anthropic.APIConnectionError(request=REQUEST)

        with pytest.raises(LLMTransportError):
            AnthropicProvider(api_key="key").complete("sys", "user")


class TestOpenAIProvider:
    """Tests for OpenAIProvider and its OpenAI-compatible subclasses."""

    @pytest.fixture
    def client(self, mocker):
        return mocker.patch("semcommit.llm.openai_provider.OpenAI")

    def _response(self, content, finish_reason="stop"):
        choice = MagicMock()
        choice.message.content = content
        choice.finish_reason = finish_reason
        response = MagicMock()
        response.choices = [choice]
        return response

    def test_returns_text(self, client):
        """Test the first choice is returned."""
        client.return_value.chat.completions.create.return_value = self._response('{"commits": []}')

        result = OpenAIProvider(api_key="key").complete("sys", "user")

        assert result == '{"commits": []}'
        kwargs = client.return_value.chat.completions.create.call_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
        assert kwargs["messages"][1] == {"role": "user", "content": "user"}

    def test_grok_base_url(self, client):
        """Test Grok points the OpenAI client at the xAI endpoint."""
        client.return_value.chat.completions.create.return_value = self._response("ok")

        GrokProvider(api_key="key").complete("sys", "user")

        assert client.call_args.kwargs["base_url"] == GROK_BASE_URL
        assert client.return_value.chat.completions.create.call_args.kwargs["model"] == "grok-beta"

    def test_truncated(self, client):
        """Test a length finish reason is a parse error."""
        client.return_value.chat.completions.create.return_value = self._response("{", "length")

        with pytest.raises(LLMResponseParseError, match="truncated"):
            OpenAIProvider(api_key="key").complete("sys", "user")

    def test_no_choices(self, client):
        """Test an empty choices list is a parse error."""
        response = MagicMock()
        response.choices = []
        client.return_value.chat.completions.create.return_value = response

        with pytest.raises(LLMResponseParseError):
            OpenAIProvider(api_key="key").complete("sys", "user")

    def test_empty_content(self, client):
        """Test a None message body is a parse error."""
        client.return_value.chat.completions.create.return_value = self._response(None)

        with pytest.raises(LLMResponseParseError, match="empty"):
            OpenAIProvider(api_key="key").complete("sys", "user")

    def test_timeout(self, client):
        """Test SDK timeouts map to LLMTimeoutError."""
        client.return_value.chat.completions.create.side_effect = openai.APITimeoutError(request=REQUEST)

        with pytest.raises(LLMTimeoutError):
            OpenAIProvider(api_key="key").complete("sys", "user")

    def test_httpx_timeout(self, client):
        """Test raw httpx timeouts map to LLMTimeoutError."""
        client.return_value.chat.completions.create.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(LLMTimeoutError):
            OpenAIProvider(api_key="key").complete("sys", "user")

    def test_auth(self, client):
        """Test a 401 maps to LLMAuthError."""
        client.return_value.chat.completions.create.side_effect = openai.AuthenticationError(
            "Incorrect API key", response=_status_response(401), body=None
        )

        with pytest.raises(LLMAuthError):
            OpenAIProvider(api_key="bad").complete("sys", "user")

    def test_rate_limit(self, client):
        """Test a 429 maps to LLMTransportError."""
        client.return_value.chat.completions.create.side_effect = openai.RateLimitError(
            "slow down", response=_status_response(429), body=None
        )

        with pytest.raises(LLMTransportError):
            OpenAIProvider(api_key="key").complete("sys", "user")


class TestAzureFoundryProvider:
    """Tests for AzureFoundryProvider."""

    def test_deployment_routing(self, mocker):
        """Test the Azure client gets the endpoint and requests name the deployment."""
        client = mocker.patch("semcommit.llm.azure_foundry_provider.AzureOpenAI")
        choice = MagicMock(finish_reason="stop")
        choice.message.content = "ok"
        client.return_value.chat.completions.create.return_value = MagicMock(choices=[choice])

        provider = AzureFoundryProvider(
            endpoint="https://res.openai.azure.com/",
            api_key="key",
            deployment="my-gpt",
        )
        assert provider.complete("sys", "user") == "ok"

        assert client.call_args.kwargs["azure_endpoint"] == "https://res.openai.azure.com"
        assert client.call_args.kwargs["api_key"] == "key"
        assert client.return_value.chat.completions.create.call_args.kwargs["model"] == "my-gpt"


class TestGeminiProvider:
    """Tests for GeminiProvider."""

    @pytest.fixture
    def client(self, mocker):
        genai = mocker.patch("semcommit.llm.google_provider.genai")
        return genai.Client

    def _response(self, text, finish_reason="STOP"):
        response = MagicMock()
        response.text = text
        response.candidates = [MagicMock(finish_reason=finish_reason)]
        return response

    def test_returns_text(self, client):
        """Test system and user prompts are sent together."""
        client.return_value.models.generate_content.return_value = self._response('{"commits": []}')

        result = GeminiProvider(api_key="key").complete("sys", "user")

        assert result == '{"commits": []}'
        kwargs = client.return_value.models.generate_content.call_args.kwargs
        assert kwargs["contents"].startswith("sys")
        assert kwargs["contents"].endswith("user")
        assert kwargs["model"] == DEFAULT_MODELS[LLMProvider.GEMINI]

    def test_safety_block(self, client):
        """Test a safety stop is a parse error."""
        client.return_value.models.generate_content.return_value = self._response("", "SAFETY")

        with pytest.raises(LLMResponseParseError, match="blocked"):
            GeminiProvider(api_key="key").complete("sys", "user")

    def test_truncated(self, client):
        """Test a max-tokens stop is a parse error."""
        client.return_value.models.generate_content.return_value = self._response("{", "MAX_TOKENS")

        with pytest.raises(LLMResponseParseError, match="truncated"):
            GeminiProvider(api_key="key").complete("sys", "user")

    def test_no_candidates(self, client):
        """Test a reply without candidates is a parse error."""
        response = MagicMock()
        response.candidates = []
        client.return_value.models.generate_content.return_value = response

        with pytest.raises(LLMResponseParseError):
            GeminiProvider(api_key="key").complete("sys", "user")

    def test_timeout(self, client):
        """Test httpx timeouts map to LLMTimeoutError."""
        client.return_value.models.generate_content.side_effect = httpx.ConnectTimeout("timed out")

        with pytest.raises(LLMTimeoutError):
            GeminiProvider(api_key="key").complete("sys", "user")

    def test_connection_error(self, client):
        """Test other httpx failures map to LLMTransportError."""
        client.return_value.models.generate_content.side_effect = httpx.ConnectError("refused")

        with pytest.raises(LLMTransportError):
            GeminiProvider(api_key="key").complete("sys", "user")


class TestIsAuthError:
    """Tests for the Gemini auth-error classifier."""

    @pytest.mark.parametrize("code", [401, 403])
    def test_auth_codes(self, code):
        """Test 401 and 403 are auth failures."""
        assert _is_auth_error(MagicMock(code=code)) is True

    def test_invalid_key_400(self):
        """Test a 400 mentioning the API key is an auth failure."""
        error = MagicMock(code=400)
        error.__str__.return_value = "400 INVALID_ARGUMENT. API key not valid."
        assert _is_auth_error(error) is True

    def test_other_400(self):
        """Test an unrelated 400 is not an auth failure."""
        error = MagicMock(code=400)
        error.__str__.return_value = "400 INVALID_ARGUMENT. contents is empty"
        assert _is_auth_error(error) is False
