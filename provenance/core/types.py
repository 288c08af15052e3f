"""
Domain types and data models for the provenance engine.

These types define the core data structures used throughout the system,
providing type safety and clear contracts between components.
"""

import math
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple


SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")


class DetectionState(Enum):
    """Stages a detection request moves through"""
    EXTRACTING = "extracting"
    AWAITING_PROVIDERS = "awaiting_providers"
    SCORING = "scoring"
    DONE = "done"
    FAILED = "failed"


def _check_unit_interval(name: str, value: float) -> None:
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be 0-1, got {value}")


@dataclass(frozen=True)
class TextSample:
    """
    Tokenized view of an input passage.

    Words are whitespace-separated tokens; sentences are the trimmed,
    non-empty pieces between runs of terminal punctuation.
    """
    text: str
    words: Tuple[str, ...]
    sentences: Tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "TextSample":
        words = tuple(text.split())
        sentences = tuple(
            piece.strip() for piece in SENTENCE_SPLIT_PATTERN.split(text) if piece.strip()
        )
        return cls(text=text, words=words, sentences=sentences)

    @property
    def sentence_lengths(self) -> List[int]:
        """Word count of every sentence"""
        return [len(sentence.split()) for sentence in self.sentences]


@dataclass(frozen=True)
class LinguisticMetrics:
    """
    Linguistic features of a passage.

    Every field except the sentence-length statistics and the counts
    lies in [0, 1].
    """
    avg_sentence_length: float
    sentence_length_variance: float
    vocabulary_richness: float
    repetition_ratio: float
    transition_density: float
    perplexity: float
    burstiness: float
    sentiment: float
    readability: float
    total_words: int
    total_sentences: int

    def __post_init__(self):
        """Validate metric bounds"""
        for name in (
            "vocabulary_richness",
            "repetition_ratio",
            "transition_density",
            "perplexity",
            "burstiness",
            "sentiment",
            "readability",
        ):
            _check_unit_interval(name, getattr(self, name))
        for name in ("avg_sentence_length", "sentence_length_variance"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"{name} must be a finite non-negative number, got {value}")

    def to_dict(self) -> Dict:
        return {
            "avgSentenceLength": self.avg_sentence_length,
            "sentenceLengthVariance": self.sentence_length_variance,
            "vocabularyRichness": self.vocabulary_richness,
            "repetitionRatio": self.repetition_ratio,
            "transitionDensity": self.transition_density,
            "perplexityHeuristic": self.perplexity,
            "burstinessHeuristic": self.burstiness,
            "sentimentScore": self.sentiment,
            "readabilityScore": self.readability,
            "totalWords": self.total_words,
            "totalSentences": self.total_sentences,
        }


@dataclass(frozen=True)
class ProviderJudgment:
    """
    Judgment from a single external provider.

    Immutable; created per orchestrator call and consumed by the scorer.
    """
    provider: str
    score: float
    reasoning: Tuple[str, ...] = ()
    success: bool = True
    model: Optional[str] = None

    def __post_init__(self):
        _check_unit_interval("score", self.score)


@dataclass(frozen=True)
class ProviderSettlement:
    """Outcome of fanning a text out to every configured provider"""
    judgments: Tuple[ProviderJudgment, ...]
    attempted: int
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> int:
        return len(self.judgments)


@dataclass(frozen=True)
class Indicator:
    """Explainable sub-score for one linguistic feature"""
    name: str
    score: float
    description: str

    def __post_init__(self):
        _check_unit_interval("score", self.score)

    def to_dict(self) -> Dict:
        return {"score": float(self.score), "description": self.description}


@dataclass(frozen=True)
class ConsensusResult:
    """
    Final detection result.

    Created once per request by the detection service.
    """
    is_ai_generated: bool
    confidence: float
    reasoning: Tuple[str, ...]
    indicators: Mapping[str, Indicator]
    model_consensus: str
    timestamp: datetime
    providers_attempted: int = 0
    providers_succeeded: int = 0

    def __post_init__(self):
        _check_unit_interval("confidence", self.confidence)
        object.__setattr__(self, "reasoning", tuple(self.reasoning))
        object.__setattr__(self, "indicators", MappingProxyType(dict(self.indicators)))

    def to_dict(self) -> Dict:
        """Convert to dictionary for API responses"""
        return {
            "isAIGenerated": self.is_ai_generated,
            "confidence": float(self.confidence),
            "reasoning": list(self.reasoning),
            "indicators": {name: ind.to_dict() for name, ind in self.indicators.items()},
            "modelConsensus": self.model_consensus,
            "timestamp": self.timestamp.isoformat(),
        }
