"""
Consensus scoring for provider judgments and linguistic heuristics.

Blends the mean provider score with the weighted linguistic score and
applies the classification threshold.
"""

from typing import Sequence, Tuple

import numpy as np

from provenance.core.config import AI_CONFIDENCE_THRESHOLD
from provenance.core.exceptions import ConfigurationError
from provenance.core.types import LinguisticMetrics, ProviderJudgment
from provenance.scorers.heuristic import HeuristicScorer


MODEL_WEIGHT = 0.7
LINGUISTIC_WEIGHT = 0.3


class ConsensusScorer:
    """
    Combines provider judgments with the linguistic score.

    Features:
    - Fixed 70/30 blend of provider mean and linguistic score
    - Linguistics-only fallback when no provider contributed
    - Exclusive classification threshold
    """

    def __init__(
        self,
        threshold: float = AI_CONFIDENCE_THRESHOLD,
        heuristic: HeuristicScorer = None,
    ):
        """
        Initialize consensus scorer.

        Args:
            threshold: Scores strictly above this are classified as AI-generated
            heuristic: Linguistic scorer; defaults to the standard weights
        """
        if not 0.0 <= threshold <= 1.0:
            raise ConfigurationError("threshold", f"must be 0-1, got {threshold}")
        self.threshold = threshold
        self.heuristic = heuristic or HeuristicScorer()

    def score(
        self,
        judgments: Sequence[ProviderJudgment],
        metrics: LinguisticMetrics,
    ) -> Tuple[float, bool]:
        """
        Compute the consensus score and classification.

        Args:
            judgments: Successful provider judgments (may be empty)
            metrics: Linguistic metrics of the passage

        Returns:
            (score, is_ai_generated) tuple
        """
        linguistic = self.heuristic.score(metrics)

        if not judgments:
            consensus = linguistic
        else:
            model_consensus = float(np.mean([j.score for j in judgments]))
            blended = MODEL_WEIGHT * model_consensus + LINGUISTIC_WEIGHT * linguistic
            consensus = float(min(max(blended, 0.0), 1.0))

        return consensus, self.classify(consensus)

    def classify(self, score: float) -> bool:
        """AI-generated iff score is strictly above the threshold"""
        return score > self.threshold
