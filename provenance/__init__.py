"""
Provenance: text authorship consensus engine.

Scores how likely a passage is to be machine-written by blending external
judge models with explainable linguistic heuristics.
"""

__version__ = "1.0.0"
