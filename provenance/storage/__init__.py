"""
Result stores for the provenance engine.
"""

from provenance.storage.memory import InMemoryResultStore

__all__ = [
    "InMemoryResultStore",
]
