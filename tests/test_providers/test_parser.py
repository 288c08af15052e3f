"""
Tests for the model output parser
"""
import pytest

from provenance.providers.parser import DEFAULT_SCORE, ResponseParser


class TestResponseParser:
    """Test suite for ResponseParser"""

    @pytest.fixture
    def parser(self):
        """Create parser instance"""
        return ResponseParser(default_reasoning="Stub analysis completed")

    def test_plain_json(self, parser):
        """Test a bare JSON answer"""
        parsed = parser.parse('{"ai_score": 0.82, "reasoning": ["uniform", "formal"]}')
        assert parsed.ok
        assert parsed.score == 0.82
        assert parsed.reasoning == ("uniform", "formal")
        assert parsed.score_defaulted is False

    def test_json_embedded_in_prose(self, parser):
        """Test JSON wrapped in commentary and code fences"""
        output = (
            "Sure! Here is my analysis:\n```json\n"
            '{\n  "ai_score": 0.3,\n  "reasoning": ["personal voice"],\n  "confidence": 0.7\n}\n'
            "```\nLet me know if you need more."
        )
        parsed = parser.parse(output)
        assert parsed.ok
        assert parsed.score == 0.3
        assert parsed.reasoning == ("personal voice",)

    def test_missing_score_defaults(self, parser):
        """Test that valid JSON without a score yields the default score"""
        parsed = parser.parse('{"reasoning": ["unsure"]}')
        assert parsed.ok
        assert parsed.score == DEFAULT_SCORE
        assert parsed.score_defaulted is True

    def test_zero_score_is_kept(self, parser):
        """Test that a score of zero is not replaced by the default"""
        parsed = parser.parse('{"ai_score": 0}')
        assert parsed.ok
        assert parsed.score == 0.0

    def test_out_of_range_score_is_clipped(self, parser):
        """Test clipping of scores outside [0, 1]"""
        assert parser.parse('{"ai_score": 1.7}').score == 1.0
        assert parser.parse('{"ai_score": -0.2}').score == 0.0

    def test_non_numeric_score(self, parser):
        """Test that a non-numeric score is an error"""
        parsed = parser.parse('{"ai_score": "high"}')
        assert not parsed.ok
        assert "not numeric" in parsed.error

    def test_boolean_score(self, parser):
        """Test that booleans are not accepted as scores"""
        assert not parser.parse('{"ai_score": true}').ok

    def test_no_json(self, parser):
        """Test output with no braces at all"""
        parsed = parser.parse("I think this was written by a person.")
        assert not parsed.ok
        assert parsed.score is None

    def test_invalid_json(self, parser):
        """Test output with a broken JSON object"""
        assert not parser.parse("{ai_score: 0.5,}").ok

    @pytest.mark.parametrize("output", [None, ""])
    def test_empty_output(self, parser, output):
        """Test empty or missing output"""
        assert not parser.parse(output).ok

    def test_default_reasoning(self, parser):
        """Test that missing reasoning falls back to the default line"""
        assert parser.parse('{"ai_score": 0.5}').reasoning == ("Stub analysis completed",)
        assert parser.parse('{"ai_score": 0.5, "reasoning": []}').reasoning == (
            "Stub analysis completed",
        )

    def test_string_reasoning(self, parser):
        """Test that a single reasoning string is accepted"""
        parsed = parser.parse('{"ai_score": 0.5, "reasoning": "too polished"}')
        assert parsed.reasoning == ("too polished",)
