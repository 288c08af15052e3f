"""
Detection service for the provenance engine.

Composition root: runs linguistic extraction alongside the provider
fan-out, blends the results and assembles an explainable ConsensusResult.
Provider outages lower the quality of a result, never its availability.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx

from provenance.analyzers.linguistic import LinguisticAnalyzer
from provenance.core.config import DetectionConfig
from provenance.core.exceptions import ValidationError
from provenance.core.interfaces import ExplainerProtocol, FeatureExtractorProtocol, ResultStore
from provenance.core.log import get_logger
from provenance.core.types import ConsensusResult, DetectionState
from provenance.ensemble.consensus import ConsensusScorer
from provenance.explain.indicators import IndicatorBuilder
from provenance.providers.anthropic import AnthropicProvider
from provenance.providers.cloudflare import CloudflareProvider
from provenance.providers.orchestrator import ProviderOrchestrator


logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DetectionService:
    """
    Text provenance detection combining providers and linguistics.

    Sequence per request:
    - EXTRACTING: linguistic metrics in a worker thread
    - AWAITING_PROVIDERS: provider fan-out, concurrently with extraction
    - SCORING: consensus score, classification and indicators
    - DONE: result stamped and handed to the result store

    FAILED is reached only when the input is not a string.
    """

    def __init__(
        self,
        orchestrator: ProviderOrchestrator = None,
        analyzer: FeatureExtractorProtocol = None,
        scorer: ConsensusScorer = None,
        explainer: ExplainerProtocol = None,
        store: Optional[ResultStore] = None,
        clock: Callable[[], datetime] = None,
    ):
        """
        Initialize the detection service.

        Args:
            orchestrator: Provider fan-out; no providers when omitted
            analyzer: Linguistic feature extractor
            scorer: Consensus scorer carrying the classification threshold
            explainer: Indicator and reasoning builder
            store: Optional result store, written best-effort
            clock: Timestamp source
        """
        self.orchestrator = orchestrator or ProviderOrchestrator([])
        self.analyzer = analyzer or LinguisticAnalyzer()
        self.scorer = scorer or ConsensusScorer()
        self.explainer = explainer or IndicatorBuilder(
            {
                client.name: getattr(client, "display_name", client.name)
                for client in self.orchestrator.clients
            }
        )
        self.store = store
        self.clock = clock or _utc_now

    @classmethod
    def from_config(
        cls,
        config: DetectionConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        store: Optional[ResultStore] = None,
    ) -> "DetectionService":
        """
        Build a service with the providers described by a configuration.

        Providers without credentials are still registered; the
        orchestrator skips them.
        """
        clients = [
            CloudflareProvider(
                api_token=config.cloudflare_api_token,
                account_id=config.cloudflare_account_id,
                models=config.cloudflare_models,
                timeout=config.provider_timeout,
                http_client=http_client,
            ),
            AnthropicProvider(
                api_key=config.anthropic_api_key,
                model=config.anthropic_model,
                char_budget=config.anthropic_char_budget,
                timeout=config.provider_timeout,
                http_client=http_client,
            ),
        ]
        logger.info(
            "detection_service_configured",
            providers=[client.name for client in clients if client.is_configured],
            threshold=config.ai_threshold,
        )
        return cls(
            orchestrator=ProviderOrchestrator(clients, timeout=config.deadline),
            scorer=ConsensusScorer(threshold=config.ai_threshold),
            store=store,
        )

    async def detect(self, text: str, deadline: Optional[float] = None) -> ConsensusResult:
        """
        Analyze text for machine authorship.

        Args:
            text: Passage to analyze; length is bounded by the caller
            deadline: Seconds to wait for providers before scoring without
                      the ones still running (None for no limit)

        Returns:
            ConsensusResult for the passage

        Raises:
            ValidationError: If text is not a string
        """
        log = logger.bind(request_id=uuid.uuid4().hex[:12])
        if not isinstance(text, str):
            log.error("detection_state", state=DetectionState.FAILED.value,
                      reason="text is not a string")
            raise ValidationError("text", "Text must be a string")

        log.debug("detection_state", state=DetectionState.EXTRACTING.value, text_length=len(text))
        extraction = asyncio.to_thread(self.analyzer.extract_metrics, text)

        log.debug("detection_state", state=DetectionState.AWAITING_PROVIDERS.value)
        metrics, settlement = await asyncio.gather(
            extraction,
            self.orchestrator.settle(text, deadline=deadline),
        )

        log.debug("detection_state", state=DetectionState.SCORING.value)
        confidence, is_ai = self.scorer.score(settlement.judgments, metrics)
        result = ConsensusResult(
            is_ai_generated=is_ai,
            confidence=confidence,
            reasoning=tuple(self.explainer.build_reasoning(settlement.judgments)),
            indicators=self.explainer.build(metrics),
            model_consensus=self.explainer.describe_consensus(settlement.succeeded),
            timestamp=self.clock(),
            providers_attempted=settlement.attempted,
            providers_succeeded=settlement.succeeded,
        )

        log.info(
            "detection_state",
            state=DetectionState.DONE.value,
            confidence=round(confidence, 4),
            is_ai_generated=is_ai,
            providers_succeeded=settlement.succeeded,
            providers_attempted=settlement.attempted,
        )
        self._persist(result, log)
        return result

    def detect_sync(self, text: str, deadline: Optional[float] = None) -> ConsensusResult:
        """Run detect() to completion from synchronous code."""
        return asyncio.run(self.detect(text, deadline=deadline))

    def _persist(self, result: ConsensusResult, log) -> None:
        if self.store is None:
            return
        try:
            self.store.save(result)
        except Exception as e:
            # Persistence is best-effort; the caller still gets the result
            log.warning("result_persist_failed", error_type=e.__class__.__name__, error=str(e))
