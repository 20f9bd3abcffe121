"""
Expectation Evaluator.

Applies a step's expectation pattern to command output. Patterns are
case-insensitive regular expressions searched anywhere in the text
(re.search semantics, not re.fullmatch).
"""

import re
from functools import lru_cache
from typing import Pattern

from ..exceptions import InvalidPatternError


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern[str]:
    """Compile and cache a pattern. Raises InvalidPatternError if malformed."""
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def matches(pattern: str, text: str) -> bool:
    return compile_pattern(pattern).search(text or "") is not None
