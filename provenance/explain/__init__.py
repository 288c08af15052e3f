"""
Explanation generation for the provenance engine.
"""

from provenance.explain.indicators import IndicatorBuilder, INDICATOR_TEMPLATES

__all__ = [
    "IndicatorBuilder",
    "INDICATOR_TEMPLATES",
]
