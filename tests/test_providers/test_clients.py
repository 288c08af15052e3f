"""
Tests for the provider clients, with HTTP stubbed by httpx.MockTransport
"""
import asyncio
import json

import httpx
import pytest

from provenance.core.exceptions import (
    ProviderAllModelsExhausted,
    ProviderAuthMissing,
    ProviderMalformedResponse,
    ProviderTimeout,
    ProviderTransportError,
)
from provenance.providers.anthropic import AnthropicProvider
from provenance.providers.cloudflare import CloudflareProvider


MODELS = ("@cf/test/first", "@cf/test/second")


def cloudflare_body(text: str, key: str = "response") -> dict:
    return {"result": {key: text}, "success": True}


def anthropic_body(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestCloudflareProvider:
    """Test suite for the ordered-model provider"""

    @pytest.fixture
    def requests_seen(self):
        """Requests captured by the mock transport"""
        return []

    def make_provider(self, handler, **overrides):
        options = dict(
            api_token="token",
            account_id="account",
            models=MODELS,
            http_client=mock_client(handler),
        )
        options.update(overrides)
        return CloudflareProvider(**options)

    def test_first_model_answers(self, requests_seen):
        """Test that the first model's judgment is used when it parses"""
        def handler(request):
            requests_seen.append(request)
            return httpx.Response(200, json=cloudflare_body('{"ai_score": 0.9, "reasoning": ["flat"]}'))

        judgment = asyncio.run(self.make_provider(handler).judge("Some text."))

        assert judgment.provider == "cloudflare"
        assert judgment.score == 0.9
        assert judgment.reasoning == ("flat",)
        assert judgment.model == MODELS[0]
        assert len(requests_seen) == 1
        assert requests_seen[0].headers["Authorization"] == "Bearer token"
        assert "/accounts/account/ai/run/" in str(requests_seen[0].url)
        assert str(requests_seen[0].url).endswith("first")

    def test_falls_back_on_unparseable_output(self, requests_seen):
        """Test that an unparseable answer moves on to the next model"""
        def handler(request):
            requests_seen.append(request)
            if str(request.url).endswith("first"):
                return httpx.Response(200, json=cloudflare_body("I cannot help with that."))
            return httpx.Response(200, json=cloudflare_body('{"ai_score": 0.4}', key="output"))

        judgment = asyncio.run(self.make_provider(handler).judge("Some text."))

        assert judgment.model == MODELS[1]
        assert judgment.score == 0.4
        assert judgment.reasoning == ("Cloudflare analysis completed",)
        assert [str(r.url).rsplit("/", 1)[-1] for r in requests_seen] == ["first", "second"]

    def test_falls_back_on_timeout(self):
        """Test that a timed out model moves on to the next model"""
        def handler(request):
            if str(request.url).endswith("first"):
                raise httpx.ReadTimeout("timed out", request=request)
            return httpx.Response(200, json=cloudflare_body('{"ai_score": 0.6}', key="message"))

        judgment = asyncio.run(self.make_provider(handler).judge("Some text."))
        assert judgment.model == MODELS[1]

    def test_all_models_exhausted(self, requests_seen):
        """Test that every model failing raises with one entry per model"""
        def handler(request):
            requests_seen.append(request)
            return httpx.Response(500, json={"errors": ["boom"]})

        with pytest.raises(ProviderAllModelsExhausted) as exc_info:
            asyncio.run(self.make_provider(handler).judge("Some text."))

        assert set(exc_info.value.failures) == set(MODELS)
        assert exc_info.value.provider == "cloudflare"
        assert len(requests_seen) == 2

    def test_missing_credentials(self, requests_seen):
        """Test that an unconfigured provider never sends a request"""
        def handler(request):
            requests_seen.append(request)
            return httpx.Response(200, json=cloudflare_body('{"ai_score": 0.5}'))

        provider = self.make_provider(handler, account_id=None)
        assert provider.is_configured is False
        with pytest.raises(ProviderAuthMissing):
            asyncio.run(provider.judge("Some text."))
        assert requests_seen == []

    def test_extract_output_shapes(self):
        """Test the result keys the provider reads, in priority order"""
        assert CloudflareProvider.extract_output({"result": {"response": "a", "output": "b"}}) == "a"
        assert CloudflareProvider.extract_output({"result": {"message": "c"}}) == "c"
        assert CloudflareProvider.extract_output({"result": None}) == ""
        assert CloudflareProvider.extract_output([]) == ""


class TestAnthropicProvider:
    """Test suite for the single-model provider"""

    def make_provider(self, handler, **overrides):
        options = dict(api_key="key", model="claude-test", http_client=mock_client(handler))
        options.update(overrides)
        return AnthropicProvider(**options)

    def test_successful_judgment(self):
        """Test a well-formed Messages API answer"""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                200, json=anthropic_body('Here: {"ai_score": 0.75, "reasoning": ["generic"]}')
            )

        judgment = asyncio.run(self.make_provider(handler).judge("Some text."))

        assert judgment.provider == "anthropic"
        assert judgment.score == 0.75
        assert judgment.model == "claude-test"
        assert str(seen[0].url) == "https://api.anthropic.com/v1/messages"
        assert seen[0].headers["x-api-key"] == "key"
        assert seen[0].headers["anthropic-version"] == "2023-06-01"
        body = json.loads(seen[0].content)
        assert body["model"] == "claude-test"

    def test_input_is_truncated(self):
        """Test that only the character budget is submitted"""
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json=anthropic_body('{"ai_score": 0.5}'))

        text = "a" * 2000 + "b" * 3000
        asyncio.run(self.make_provider(handler).judge(text))

        prompt = seen[0]["messages"][0]["content"]
        assert "a" * 2000 + "..." in prompt
        assert "b" not in prompt.split("Text:")[-1]

    def test_short_input_is_not_truncated(self):
        """Test that text within the budget is sent as is"""
        provider = AnthropicProvider(api_key="key", char_budget=10)
        assert provider.truncate("short") == "short"
        assert provider.truncate("a" * 11) == "a" * 10 + "..."

    def test_malformed_response(self):
        """Test that output without JSON raises ProviderMalformedResponse"""
        def handler(request):
            return httpx.Response(200, json=anthropic_body("Probably human."))

        with pytest.raises(ProviderMalformedResponse):
            asyncio.run(self.make_provider(handler).judge("Some text."))

    def test_unexpected_body_shape(self):
        """Test that a body without content blocks is malformed"""
        def handler(request):
            return httpx.Response(200, json={"content": []})

        with pytest.raises(ProviderMalformedResponse):
            asyncio.run(self.make_provider(handler).judge("Some text."))

    def test_non_json_body(self):
        """Test that a non-JSON body is malformed"""
        def handler(request):
            return httpx.Response(200, text="<html>gateway</html>")

        with pytest.raises(ProviderMalformedResponse):
            asyncio.run(self.make_provider(handler).judge("Some text."))

    def test_http_error(self):
        """Test that a non-2xx status raises ProviderTransportError"""
        def handler(request):
            return httpx.Response(401, json={"error": "unauthorized"})

        with pytest.raises(ProviderTransportError) as exc_info:
            asyncio.run(self.make_provider(handler).judge("Some text."))
        assert "401" in str(exc_info.value)

    def test_timeout(self):
        """Test that a request timeout raises ProviderTimeout"""
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(ProviderTimeout):
            asyncio.run(self.make_provider(handler).judge("Some text."))

    def test_missing_credentials(self):
        """Test that a missing API key raises ProviderAuthMissing"""
        provider = AnthropicProvider(api_key=None)
        assert provider.is_configured is False
        with pytest.raises(ProviderAuthMissing):
            asyncio.run(provider.judge("Some text."))

    def test_extract_output_shapes(self):
        """Test reading the first text block from SDK and plain responses"""
        class Block:
            text = "from sdk"

        class Message:
            content = [Block()]

        assert AnthropicProvider.extract_output(Message()) == "from sdk"
        assert AnthropicProvider.extract_output("<html>gateway</html>") == ""
        assert AnthropicProvider.extract_output(None) == ""
