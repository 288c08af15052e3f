"""
Heuristic linguistic scoring.

Turns LinguisticMetrics into a single AI-likelihood score using fixed
thresholds and weights. The same per-feature sub-scores feed the
indicators shown to users.
"""

from typing import Dict

from provenance.core.types import LinguisticMetrics


FEATURE_WEIGHTS = {
    "sentenceStructure": 0.20,
    "vocabularyComplexity": 0.15,
    "repetitionPatterns": 0.15,
    "transitionUsage": 0.10,
    "perplexity": 0.15,
    "burstiness": 0.10,
    "sentiment": 0.05,
    "readability": 0.10,
}

# Threshold rules: (cutoff, score when AI-like, score otherwise)
SENTENCE_VARIANCE_RULE = (5.0, 0.8, 0.3)      # variance below cutoff is AI-like
VOCABULARY_RICHNESS_RULE = (0.6, 0.7, 0.4)    # richness below cutoff is AI-like
REPETITION_RATIO_RULE = (0.15, 0.8, 0.2)      # ratio above cutoff is AI-like
TRANSITION_DENSITY_RULE = (0.3, 0.8, 0.3)     # density above cutoff is AI-like

FULL_LENGTH_WORDS = 100


def feature_subscores(metrics: LinguisticMetrics) -> Dict[str, float]:
    """
    Per-feature AI-likelihood sub-scores in [0, 1].

    Args:
        metrics: Linguistic metrics of a passage

    Returns:
        Dictionary keyed by indicator name
    """
    cutoff, ai_like, human_like = SENTENCE_VARIANCE_RULE
    sentence_structure = ai_like if metrics.sentence_length_variance < cutoff else human_like

    cutoff, ai_like, human_like = VOCABULARY_RICHNESS_RULE
    vocabulary = ai_like if metrics.vocabulary_richness < cutoff else human_like

    cutoff, ai_like, human_like = REPETITION_RATIO_RULE
    repetition = ai_like if metrics.repetition_ratio > cutoff else human_like

    cutoff, ai_like, human_like = TRANSITION_DENSITY_RULE
    transitions = ai_like if metrics.transition_density > cutoff else human_like

    return {
        "sentenceStructure": sentence_structure,
        "vocabularyComplexity": vocabulary,
        "repetitionPatterns": repetition,
        "transitionUsage": transitions,
        # Lower perplexity and burstiness read as more predictable text
        "perplexity": 1.0 - metrics.perplexity,
        "burstiness": 1.0 - metrics.burstiness,
        # Neutral sentiment reads as AI-like
        "sentiment": abs(metrics.sentiment - 0.5) * 2.0,
        "readability": metrics.readability,
    }


class HeuristicScorer:
    """
    Heuristic scorer that converts linguistic metrics to an AI score.

    Weighted sum of the feature sub-scores, damped for short passages:
    texts under FULL_LENGTH_WORDS words keep between 80% and 100% of
    their weighted score.
    """

    def __init__(self, weights: Dict[str, float] = None):
        self.weights = dict(weights or FEATURE_WEIGHTS)

    def score(self, metrics: LinguisticMetrics) -> float:
        """
        Compute the weighted linguistic score.

        Args:
            metrics: Linguistic metrics of a passage

        Returns:
            Score in [0, 1]
        """
        subscores = feature_subscores(metrics)
        weighted = sum(subscores[name] * weight for name, weight in self.weights.items())

        length_factor = min(metrics.total_words / FULL_LENGTH_WORDS, 1.0)
        final = weighted * (0.8 + 0.2 * length_factor)
        return float(min(max(final, 0.0), 1.0))


def weighted_linguistic_score(metrics: LinguisticMetrics) -> float:
    """Score metrics with the default feature weights."""
    return HeuristicScorer().score(metrics)
