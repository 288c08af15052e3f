"""
Feature analyzers for the provenance engine.

This module contains the feature extraction analyzers that implement
the FeatureExtractorProtocol interface.
"""

from provenance.analyzers.linguistic import LinguisticAnalyzer, count_syllables

__all__ = [
    "LinguisticAnalyzer",
    "count_syllables",
]
