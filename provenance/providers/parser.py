"""
Parsing of free-form judge model output.

Models are asked for a JSON object but often wrap it in prose or code
fences. The parser pulls the outermost {...} substring out of the text and
reads the score and reasoning from it, reporting problems as a value
rather than raising.
"""

import json
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple


SCORE_FIELD = "ai_score"
REASONING_FIELD = "reasoning"
DEFAULT_SCORE = 0.5

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class ParsedResponse:
    """Result of parsing one model answer"""
    score: Optional[float] = None
    reasoning: Tuple[str, ...] = ()
    error: Optional[str] = None
    score_defaulted: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class ResponseParser:
    """
    Extracts a judgment from model output text.

    A missing score field inside otherwise valid JSON yields DEFAULT_SCORE;
    a present but non-numeric score is an error. Numeric scores outside
    [0, 1] are clipped.
    """

    def __init__(self, default_reasoning: str = "Analysis completed"):
        self.default_reasoning = default_reasoning

    def parse(self, output: Optional[str]) -> ParsedResponse:
        """
        Parse model output.

        Args:
            output: Raw text returned by the model

        Returns:
            ParsedResponse; check .ok before using .score
        """
        if not output or not isinstance(output, str):
            return ParsedResponse(error="empty model output")

        match = _JSON_OBJECT.search(output)
        if match is None:
            return ParsedResponse(error="no JSON object in model output")

        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            return ParsedResponse(error=f"invalid JSON in model output: {e.msg}")

        if not isinstance(data, dict):
            return ParsedResponse(error="model output JSON is not an object")

        raw_score = data.get(SCORE_FIELD)
        score_defaulted = False
        if raw_score is None:
            score = DEFAULT_SCORE
            score_defaulted = True
        elif isinstance(raw_score, bool) or not isinstance(raw_score, (int, float)):
            return ParsedResponse(error=f"{SCORE_FIELD} is not numeric: {raw_score!r}")
        elif math.isnan(raw_score):
            return ParsedResponse(error=f"{SCORE_FIELD} is NaN")
        else:
            score = float(min(max(raw_score, 0.0), 1.0))

        return ParsedResponse(
            score=score,
            reasoning=self._reasoning(data.get(REASONING_FIELD)),
            score_defaulted=score_defaulted,
        )

    def _reasoning(self, raw) -> Tuple[str, ...]:
        if isinstance(raw, str) and raw.strip():
            return (raw.strip(),)
        if isinstance(raw, list):
            reasons = tuple(str(item).strip() for item in raw if str(item).strip())
            if reasons:
                return reasons
        return (self.default_reasoning,)
