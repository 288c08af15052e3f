"""
Scoring strategies for the provenance engine.

This module provides scorers that convert linguistic metrics into
AI likelihood scores.
"""

from provenance.scorers.heuristic import (
    HeuristicScorer,
    FEATURE_WEIGHTS,
    feature_subscores,
    weighted_linguistic_score,
)

__all__ = [
    "HeuristicScorer",
    "FEATURE_WEIGHTS",
    "feature_subscores",
    "weighted_linguistic_score",
]
