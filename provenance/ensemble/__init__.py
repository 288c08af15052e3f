"""
Consensus strategies for the provenance engine.

This module provides the scorer that combines provider judgments and
linguistic analysis into a single result.
"""

from provenance.ensemble.consensus import ConsensusScorer, MODEL_WEIGHT, LINGUISTIC_WEIGHT

__all__ = [
    "ConsensusScorer",
    "MODEL_WEIGHT",
    "LINGUISTIC_WEIGHT",
]
