"""
Linguistic feature extraction.

Computes eight normalized metrics from the surface of a passage: sentence
length statistics, vocabulary richness, word repetition, transition word
density, and the perplexity, burstiness, sentiment and readability
heuristics. Pure and deterministic; no I/O.

The perplexity, burstiness and readability values are hand-tuned
heuristics. They have not been validated against labeled human/AI corpora.
"""

import re
from collections import Counter
from typing import Dict, List, Sequence

import numpy as np

from provenance.core.types import LinguisticMetrics, TextSample


TRANSITION_PHRASES = (
    "furthermore", "moreover", "additionally", "consequently", "therefore",
    "however", "nevertheless", "nonetheless", "meanwhile", "similarly",
    "likewise", "in contrast", "on the other hand", "for example", "for instance",
)

POSITIVE_WORDS = (
    "happy", "joy", "love", "excellent", "great", "wonderful", "amazing", "fantastic",
)
NEGATIVE_WORDS = (
    "sad", "angry", "hate", "terrible", "awful", "horrible", "bad", "worst",
)

# Values returned when the input has no words or no sentences
DEFAULT_VOCABULARY_RICHNESS = 0.5
DEFAULT_REPETITION_RATIO = 0.0
DEFAULT_TRANSITION_DENSITY = 0.0
DEFAULT_PERPLEXITY = 0.5
DEFAULT_BURSTINESS = 0.5
DEFAULT_READABILITY = 0.5

_NON_WORD = re.compile(r"[^\w]")
_VOWEL_GROUP = re.compile(r"[aeiouy]+")
_LEXICON_PATTERNS = {
    word: re.compile(rf"\b{word}\b") for word in POSITIVE_WORDS + NEGATIVE_WORDS
}


def _clip(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return float(min(max(value, low), high))


def count_syllables(word: str) -> int:
    """
    Approximate syllable count of a single token.

    Words ending in "es" or "ed" count as one syllable; everything else
    counts vowel groups, with a floor of one.
    """
    lowered = word.lower()
    if lowered.endswith("es") or lowered.endswith("ed"):
        return 1
    groups = _VOWEL_GROUP.findall(lowered)
    return len(groups) if groups else 1


class LinguisticAnalyzer:
    """
    Extracts LinguisticMetrics from raw text.

    Never raises for string input: passages with no words or no sentences
    get the DEFAULT_* values instead of a division by zero.
    """

    def __init__(self):
        self._name = "linguistic"

    @property
    def name(self) -> str:
        """Unique identifier for this analyzer"""
        return self._name

    def extract_metrics(self, text: str) -> LinguisticMetrics:
        """
        Extract linguistic metrics from text.

        Args:
            text: Input text to analyze

        Returns:
            LinguisticMetrics for the passage
        """
        sample = TextSample.from_text(text)
        words = sample.words
        sentence_lengths = sample.sentence_lengths

        if sentence_lengths:
            lengths = np.asarray(sentence_lengths, dtype=float)
            avg_sentence_length = float(lengths.mean())
            sentence_length_variance = float(lengths.var())
        else:
            avg_sentence_length = 0.0
            sentence_length_variance = 0.0

        lowered = [w.lower() for w in words]
        counts = Counter(lowered)

        return LinguisticMetrics(
            avg_sentence_length=avg_sentence_length,
            sentence_length_variance=sentence_length_variance,
            vocabulary_richness=self.vocabulary_richness(lowered),
            repetition_ratio=self.repetition_ratio(lowered, len(counts)),
            transition_density=self.transition_density(text, len(sentence_lengths)),
            perplexity=self.perplexity(counts, len(words)),
            burstiness=self.burstiness(sentence_lengths),
            sentiment=self.sentiment(text),
            readability=self.readability(words, len(sentence_lengths)),
            total_words=len(words),
            total_sentences=len(sentence_lengths),
        )

    def vocabulary_richness(self, lowered_words: Sequence[str]) -> float:
        """Type-token ratio of the lowercased words"""
        if not lowered_words:
            return DEFAULT_VOCABULARY_RICHNESS
        return len(set(lowered_words)) / len(lowered_words)

    def repetition_ratio(self, lowered_words: Sequence[str], unique_count: int) -> float:
        """
        Share of the vocabulary taken by content words used more than twice.

        Words are stripped of non-word characters; only those longer than
        three characters are considered.
        """
        if unique_count == 0:
            return DEFAULT_REPETITION_RATIO
        frequencies: Dict[str, int] = Counter(
            normalized
            for normalized in (_NON_WORD.sub("", w) for w in lowered_words)
            if len(normalized) > 3
        )
        repeated = sum(1 for count in frequencies.values() if count > 2)
        return _clip(repeated / unique_count)

    def transition_density(self, text: str, sentence_count: int) -> float:
        """Transition phrase occurrences per sentence, capped at 1"""
        if sentence_count == 0:
            return DEFAULT_TRANSITION_DENSITY
        lowered = text.lower()
        occurrences = sum(lowered.count(phrase) for phrase in TRANSITION_PHRASES)
        return _clip(occurrences / sentence_count)

    def perplexity(self, counts: Counter, total_words: int) -> float:
        """
        Predictability heuristic from type-token and hapax ratios.

        Lower values mean a narrower, more repetitive vocabulary.
        """
        if total_words == 0 or not counts:
            return DEFAULT_PERPLEXITY
        ttr = len(counts) / total_words
        hapax_ratio = sum(1 for count in counts.values() if count == 1) / len(counts)
        return _clip(0.1 * (1.0 / (ttr * (1.0 + hapax_ratio))))

    def burstiness(self, sentence_lengths: List[int]) -> float:
        """Twice the coefficient of variation of sentence lengths, capped at 1"""
        if len(sentence_lengths) <= 1:
            return DEFAULT_BURSTINESS
        lengths = np.asarray(sentence_lengths, dtype=float)
        mean = lengths.mean()
        if mean == 0:
            return DEFAULT_BURSTINESS
        cv = lengths.std() / mean
        return _clip(cv * 2.0)

    def sentiment(self, text: str) -> float:
        """Lexicon polarity mapped from [-1, 1] onto [0, 1]; 0.5 is neutral"""
        lowered = text.lower()
        positive = sum(len(_LEXICON_PATTERNS[w].findall(lowered)) for w in POSITIVE_WORDS)
        negative = sum(len(_LEXICON_PATTERNS[w].findall(lowered)) for w in NEGATIVE_WORDS)
        raw = (positive - negative) / (positive + negative + 1)
        return (raw + 1.0) / 2.0

    def readability(self, words: Sequence[str], sentence_count: int) -> float:
        """Flesch Reading Ease divided by 100 and clipped to [0, 1]"""
        if not words or sentence_count == 0:
            return DEFAULT_READABILITY
        syllables = sum(count_syllables(w) for w in words)
        word_count = len(words)
        flesch = (
            206.835
            - 1.015 * (word_count / sentence_count)
            - 84.6 * (syllables / word_count)
        )
        return _clip(flesch / 100.0)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
