"""
Cloudflare Workers AI judge provider.

Tries each configured model in order and stops at the first one whose
answer parses into a judgment.
"""

from typing import Dict, Optional, Sequence

import httpx

from provenance.core.config import DEFAULT_CLOUDFLARE_MODELS
from provenance.core.exceptions import (
    ProviderAllModelsExhausted,
    ProviderMalformedResponse,
    ProviderTimeout,
    ProviderTransportError,
)
from provenance.core.log import get_logger
from provenance.core.types import ProviderJudgment
from provenance.providers.base import BaseProviderClient, JUDGE_SYSTEM_PROMPT


logger = get_logger(__name__)

CLOUDFLARE_RUN_URL = "https://api.cloudflare.com/client/v4/accounts/{account_id}/ai/run/{model}"

# Keys under "result" that may carry the generated text, in priority order
OUTPUT_KEYS = ("response", "output", "message")


class CloudflareProvider(BaseProviderClient):
    """
    Ordered-model provider backed by Cloudflare Workers AI.

    A model that times out, fails at the HTTP level or answers without
    usable JSON is skipped in favour of the next one. No model is tried
    twice.
    """

    def __init__(
        self,
        api_token: Optional[str],
        account_id: Optional[str],
        models: Sequence[str] = DEFAULT_CLOUDFLARE_MODELS,
        timeout: float = 20.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__("cloudflare", "Cloudflare", timeout=timeout, http_client=http_client)
        self.api_token = api_token
        self.account_id = account_id
        self.models = tuple(models)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_token and self.account_id)

    async def _judge_impl(self, text: str) -> ProviderJudgment:
        headers = {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }
        payload = {
            "messages": [
                {"role": "system", "content": JUDGE_SYSTEM_PROMPT},
                {"role": "user", "content": self.build_prompt(text)},
            ],
            "temperature": 0.1,
            "max_tokens": 500,
        }

        failures: Dict[str, str] = {}
        for model in self.models:
            url = CLOUDFLARE_RUN_URL.format(account_id=self.account_id, model=model)
            try:
                data = await self._post_json(url, headers, payload)
                return self._judgment_from_output(self.extract_output(data), model)
            except (ProviderTimeout, ProviderTransportError, ProviderMalformedResponse) as e:
                failures[model] = e.__class__.__name__
                logger.warning(
                    "provider_model_failed",
                    provider=self.name,
                    model=model,
                    error=str(e),
                )

        raise ProviderAllModelsExhausted(self.name, failures)

    @staticmethod
    def extract_output(data) -> str:
        """Pull the generated text out of a Workers AI response body"""
        if not isinstance(data, dict):
            return ""
        result = data.get("result")
        if not isinstance(result, dict):
            return ""
        for key in OUTPUT_KEYS:
            value = result.get(key)
            if isinstance(value, str) and value:
                return value
        return ""
