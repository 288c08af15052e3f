"""
Anthropic Messages API judge provider.
"""

from typing import Optional

import anthropic
import httpx

from provenance.core.config import DEFAULT_ANTHROPIC_MODEL
from provenance.core.exceptions import (
    ProviderMalformedResponse,
    ProviderTimeout,
    ProviderTransportError,
)
from provenance.core.types import ProviderJudgment
from provenance.providers.base import BaseProviderClient


ANTHROPIC_BASE_URL = "https://api.anthropic.com"


class AnthropicProvider(BaseProviderClient):
    """
    Single-model provider backed by the Anthropic Messages API.

    Only the first char_budget characters of the passage are submitted.
    SDK retries are disabled; the orchestrator owns the time budget.
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_ANTHROPIC_MODEL,
        char_budget: int = 2000,
        timeout: float = 20.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__("anthropic", "Claude", timeout=timeout, http_client=http_client)
        self.api_key = api_key
        self.model = model
        self.char_budget = char_budget

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def truncate(self, text: str) -> str:
        if len(text) <= self.char_budget:
            return text
        return text[: self.char_budget] + "..."

    def _client(self) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(
            api_key=self.api_key,
            base_url=ANTHROPIC_BASE_URL,
            timeout=self.timeout,
            max_retries=0,
            http_client=self._http_client,
        )

    async def _judge_impl(self, text: str) -> ProviderJudgment:
        request = dict(
            model=self.model,
            max_tokens=300,
            temperature=0.1,
            messages=[{"role": "user", "content": self.build_prompt(self.truncate(text))}],
        )

        try:
            if self._http_client is not None:
                # Shared transport stays open for other providers
                message = await self._client().messages.create(**request)
            else:
                async with self._client() as client:
                    message = await client.messages.create(**request)
        except anthropic.APITimeoutError as e:
            raise ProviderTimeout(self.name, self.timeout, original_error=e)
        except anthropic.APIStatusError as e:
            raise ProviderTransportError(self.name, f"HTTP {e.status_code}", original_error=e)
        except anthropic.APIConnectionError as e:
            raise ProviderTransportError(self.name, str(e), original_error=e)
        except anthropic.APIResponseValidationError as e:
            raise ProviderMalformedResponse(self.name, str(e), original_error=e)

        return self._judgment_from_output(self.extract_output(message), self.model)

    @staticmethod
    def extract_output(message) -> str:
        """Pull the first text block out of a Messages API response"""
        content = getattr(message, "content", None)
        if not isinstance(content, list) or not content:
            return ""
        first = content[0]
        text = first.get("text") if isinstance(first, dict) else getattr(first, "text", None)
        return text if isinstance(text, str) else ""
