"""
Indicator and explanation generation.

Formats the linguistic sub-scores into labeled indicators and assembles
the reasoning and consensus labels shown with a result. No scoring
happens here beyond what the heuristic scorer already defines.
"""

from typing import Dict, List, Mapping, Sequence

from provenance.core.types import Indicator, LinguisticMetrics, ProviderJudgment
from provenance.scorers.heuristic import feature_subscores


LINGUISTIC_REASONING = "Advanced multimodal linguistic analysis"

# Indicator name -> (metric attribute, description template)
INDICATOR_TEMPLATES = {
    "sentenceStructure": ("sentence_length_variance", "Sentence length variance: {:.2f}"),
    "vocabularyComplexity": ("vocabulary_richness", "Vocabulary richness: {:.2f}"),
    "repetitionPatterns": ("repetition_ratio", "Repetition ratio: {:.2f}"),
    "transitionUsage": ("transition_density", "Transition density: {:.2f}"),
    "perplexity": ("perplexity", "Perplexity: {:.2f} (lower = more AI-like)"),
    "burstiness": ("burstiness", "Burstiness: {:.2f} (lower = more AI-like)"),
    "sentiment": ("sentiment", "Sentiment: {:.2f} (neutral = more AI-like)"),
    "readability": ("readability", "Readability: {:.2f} (higher = more AI-like)"),
}


class IndicatorBuilder:
    """
    Builds the explainability payload of a detection result.

    Args:
        display_names: Provider id -> label used to prefix reasoning lines
    """

    def __init__(self, display_names: Mapping[str, str] = None):
        self.display_names = dict(display_names or {})

    def build(self, metrics: LinguisticMetrics) -> Dict[str, Indicator]:
        """
        Build the eight named indicators for a set of metrics.

        Args:
            metrics: Linguistic metrics of the passage

        Returns:
            Dictionary mapping indicator name to Indicator
        """
        subscores = feature_subscores(metrics)
        indicators = {}
        for name, (attribute, template) in INDICATOR_TEMPLATES.items():
            indicators[name] = Indicator(
                name=name,
                score=subscores[name],
                description=template.format(getattr(metrics, attribute)),
            )
        return indicators

    def build_reasoning(self, judgments: Sequence[ProviderJudgment]) -> List[str]:
        """Provider reasons prefixed with the provider label"""
        reasoning = []
        for judgment in judgments:
            label = self.display_names.get(judgment.provider, judgment.provider)
            reasoning.extend(f"{label}: {reason}" for reason in judgment.reasoning)
        if not judgments:
            reasoning.append(LINGUISTIC_REASONING)
        return reasoning

    def describe_consensus(self, provider_count: int) -> str:
        """Human label for how many providers contributed"""
        if provider_count >= 2:
            return (
                f"Multimodal consensus of {provider_count} AI models "
                "with advanced linguistic analysis"
            )
        if provider_count == 1:
            return "Single AI model with advanced linguistic analysis"
        return "Advanced multimodal linguistic analysis (no AI models available)"
