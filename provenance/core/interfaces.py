"""
Protocol definitions for provenance engine components.

These protocols define the interfaces that implementations must follow,
so providers, extractors and stores can be swapped or stubbed in tests.
"""

from typing import Dict, List, Protocol, Sequence

from provenance.core.types import (
    ConsensusResult,
    Indicator,
    LinguisticMetrics,
    ProviderJudgment,
)


class FeatureExtractorProtocol(Protocol):
    """
    Protocol for linguistic feature extraction.

    Implementations must be pure and must never raise for string input.
    """

    def extract_metrics(self, text: str) -> LinguisticMetrics:
        """
        Extract linguistic metrics from text.

        Args:
            text: Input text to analyze

        Returns:
            LinguisticMetrics with every bounded field in [0, 1]
        """
        ...


class ProviderClientProtocol(Protocol):
    """
    Protocol for external judge providers.

    A provider turns a passage into a ProviderJudgment or raises a
    ProviderError subclass describing why it could not.
    """

    @property
    def name(self) -> str:
        """Unique identifier for this provider"""
        ...

    @property
    def is_configured(self) -> bool:
        """Whether the provider has the credentials it needs"""
        ...

    async def judge(self, text: str) -> ProviderJudgment:
        """
        Judge whether text was machine-written.

        Args:
            text: Passage to judge

        Returns:
            ProviderJudgment with a score in [0, 1]

        Raises:
            ProviderError: If no judgment could be produced
        """
        ...


class ExplainerProtocol(Protocol):
    """
    Protocol for indicator generation.

    Explainers map metrics into labeled, human-readable indicators.
    """

    def build(self, metrics: LinguisticMetrics) -> Dict[str, Indicator]:
        """Build the named indicators for a set of metrics"""
        ...

    def build_reasoning(self, judgments: Sequence[ProviderJudgment]) -> List[str]:
        """Collect reasoning lines for a result"""
        ...

    def describe_consensus(self, provider_count: int) -> str:
        """Label how many providers contributed"""
        ...


class ResultStore(Protocol):
    """
    Protocol for result persistence.

    Stores abstract where detection results go, enabling different
    backends. Writes are best-effort from the service's point of view.
    """

    def save(self, result: ConsensusResult) -> None:
        """Persist a result"""
        ...

    def recent(self, limit: int = 10) -> List[ConsensusResult]:
        """Return the most recent results, newest first"""
        ...
