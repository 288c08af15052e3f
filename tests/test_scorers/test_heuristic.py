"""
Tests for the heuristic linguistic scorer
"""
import pytest

from provenance.analyzers.linguistic import LinguisticAnalyzer
from provenance.core.types import LinguisticMetrics
from provenance.scorers.heuristic import (
    FEATURE_WEIGHTS,
    HeuristicScorer,
    feature_subscores,
    weighted_linguistic_score,
)


def make_metrics(**overrides) -> LinguisticMetrics:
    values = dict(
        avg_sentence_length=10.0,
        sentence_length_variance=2.0,
        vocabulary_richness=0.5,
        repetition_ratio=0.2,
        transition_density=0.4,
        perplexity=0.1,
        burstiness=0.2,
        sentiment=0.5,
        readability=0.6,
        total_words=150,
        total_sentences=15,
    )
    values.update(overrides)
    return LinguisticMetrics(**values)


class TestHeuristicScorer:
    """Test suite for HeuristicScorer"""

    @pytest.fixture
    def scorer(self):
        """Create scorer instance"""
        return HeuristicScorer()

    def test_weights_sum_to_one(self):
        """Test that the feature weights form a convex combination"""
        assert sum(FEATURE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_ai_like_metrics(self, scorer):
        """Test the weighted formula on metrics past every AI-like threshold"""
        metrics = make_metrics()
        expected = (
            0.20 * 0.8
            + 0.15 * 0.7
            + 0.15 * 0.8
            + 0.10 * 0.8
            + 0.15 * (1 - 0.1)
            + 0.10 * (1 - 0.2)
            + 0.05 * 0.0
            + 0.10 * 0.6
        )
        assert scorer.score(metrics) == pytest.approx(expected)

    def test_human_like_metrics(self, scorer):
        """Test the weighted formula on metrics on the human side of every threshold"""
        metrics = make_metrics(
            sentence_length_variance=30.0,
            vocabulary_richness=0.8,
            repetition_ratio=0.05,
            transition_density=0.1,
            perplexity=0.9,
            burstiness=0.9,
            sentiment=1.0,
            readability=0.3,
        )
        expected = (
            0.20 * 0.3
            + 0.15 * 0.4
            + 0.15 * 0.2
            + 0.10 * 0.3
            + 0.15 * 0.1
            + 0.10 * 0.1
            + 0.05 * 1.0
            + 0.10 * 0.3
        )
        assert scorer.score(metrics) == pytest.approx(expected)

    def test_threshold_boundaries(self):
        """Test which side of each cutoff the boundary value falls on"""
        subscores = feature_subscores(make_metrics(
            sentence_length_variance=5.0,
            vocabulary_richness=0.6,
            repetition_ratio=0.15,
            transition_density=0.3,
        ))
        assert subscores["sentenceStructure"] == 0.3
        assert subscores["vocabularyComplexity"] == 0.4
        assert subscores["repetitionPatterns"] == 0.2
        assert subscores["transitionUsage"] == 0.3

    def test_short_text_is_damped(self, scorer):
        """Test the length factor for passages under 100 words"""
        long_score = scorer.score(make_metrics(total_words=100))
        short_score = scorer.score(make_metrics(total_words=0))
        assert short_score == pytest.approx(long_score * 0.8)

    def test_length_factor_saturates(self, scorer):
        """Test that passages over 100 words are not boosted further"""
        assert scorer.score(make_metrics(total_words=100)) == scorer.score(
            make_metrics(total_words=5000)
        )

    def test_golden_fixture_score(self):
        """Test the linguistic score of the golden fixture"""
        metrics = LinguisticAnalyzer().extract_metrics(
            "The cat sat on the mat. It was warm and sunny outside today."
        )
        assert weighted_linguistic_score(metrics) == pytest.approx(0.49208442382943146)

    def test_score_in_valid_range(self, scorer):
        """Test that the score lies in [0, 1] at the extremes"""
        for overrides in (
            dict(perplexity=0.0, burstiness=0.0, sentiment=0.0, readability=1.0),
            dict(perplexity=1.0, burstiness=1.0, sentiment=0.5, readability=0.0),
        ):
            assert 0.0 <= scorer.score(make_metrics(**overrides)) <= 1.0
