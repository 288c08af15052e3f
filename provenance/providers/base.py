"""
Base provider client implementation.

Provides the HTTP plumbing and response parsing shared by every external
judge provider, and maps transport problems onto the ProviderError
taxonomy.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

import httpx

from provenance.core.exceptions import (
    ProviderAuthMissing,
    ProviderMalformedResponse,
    ProviderTimeout,
    ProviderTransportError,
)
from provenance.core.log import get_logger
from provenance.core.types import ProviderJudgment
from provenance.providers.parser import ResponseParser


logger = get_logger(__name__)

JUDGE_SYSTEM_PROMPT = "You are an expert AI detection system. Respond with valid JSON only."

JUDGE_INSTRUCTIONS = """Decide whether the text below was written by an AI model or by a person.

Answer with a single JSON object and nothing else:
{
  "ai_score": <number from 0.0 (certainly human) to 1.0 (certainly AI)>,
  "reasoning": ["<short reason>", "<short reason>", "<short reason>"],
  "confidence": <number from 0.0 to 1.0>
}

Signs of AI authorship: uniform sentence length and structure, heavy use of
transition words, generic or template-like phrasing, flawless grammar,
repetitive vocabulary, an even formal tone with no personal experience.

Signs of human authorship: varied sentence rhythm, personal anecdotes and
opinions, small inconsistencies or errors, unusual phrasing, emotional or
regional language, first-person narrative.

Text:
"""


class BaseProviderClient(ABC):
    """
    Base class for external judge providers.

    Subclasses implement _judge_impl; judge() checks credentials first so
    an unconfigured provider raises ProviderAuthMissing without touching
    the network.
    """

    def __init__(
        self,
        name: str,
        display_name: str,
        timeout: float = 20.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize provider client.

        Args:
            name: Unique identifier used in logs and failure maps
            display_name: Label prefixed to this provider's reasoning lines
            timeout: Per-request timeout in seconds
            http_client: Shared client to send requests with; a short-lived
                         client is opened per request when omitted
        """
        self._name = name
        self.display_name = display_name
        self.timeout = timeout
        self._http_client = http_client
        self.parser = ResponseParser(default_reasoning=f"{display_name} analysis completed")

    @property
    def name(self) -> str:
        """Unique identifier for this provider"""
        return self._name

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the provider has the credentials it needs"""
        pass

    @abstractmethod
    async def _judge_impl(self, text: str) -> ProviderJudgment:
        """Provider-specific request and response handling"""
        pass

    async def judge(self, text: str) -> ProviderJudgment:
        """
        Judge whether text was machine-written.

        Args:
            text: Passage to judge

        Returns:
            ProviderJudgment from the first usable model answer

        Raises:
            ProviderAuthMissing: If no credential is configured
            ProviderError: If no judgment could be produced
        """
        if not self.is_configured:
            raise ProviderAuthMissing(self.name)
        return await self._judge_impl(text)

    def build_prompt(self, text: str) -> str:
        return JUDGE_INSTRUCTIONS + text

    async def _post_json(self, url: str, headers: Dict[str, str], payload: Dict) -> Dict:
        """
        POST a JSON payload and decode the JSON response.

        Raises:
            ProviderTimeout: If the request times out
            ProviderTransportError: On connection errors or non-2xx status
            ProviderMalformedResponse: If the body is not JSON
        """
        try:
            if self._http_client is not None:
                response = await self._http_client.post(
                    url, headers=headers, json=payload, timeout=self.timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, headers=headers, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise ProviderTimeout(self.name, self.timeout, original_error=e)
        except httpx.HTTPStatusError as e:
            raise ProviderTransportError(
                self.name, f"HTTP {e.response.status_code}", original_error=e
            )
        except httpx.HTTPError as e:
            raise ProviderTransportError(
                self.name, str(e) or e.__class__.__name__, original_error=e
            )
        except ValueError as e:
            raise ProviderMalformedResponse(
                self.name, f"response body is not JSON: {e}", original_error=e
            )

    def _judgment_from_output(self, output: Optional[str], model: str) -> ProviderJudgment:
        """
        Turn model output text into a judgment.

        Raises:
            ProviderMalformedResponse: If the output holds no usable JSON
        """
        parsed = self.parser.parse(output)
        if not parsed.ok:
            raise ProviderMalformedResponse(self.name, f"{model}: {parsed.error}")
        if parsed.score_defaulted:
            logger.info("provider_score_defaulted", provider=self.name, model=model)
        return ProviderJudgment(
            provider=self.name,
            score=parsed.score,
            reasoning=parsed.reasoning,
            success=True,
            model=model,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', configured={self.is_configured})"
