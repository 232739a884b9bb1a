"""
Regex constraint for string descriptors.

A ``Regex`` wraps a pattern string and its compiled form. Two regexes are
equal when their pattern text is identical; compiled flags are not compared.
"""

import re
from dataclasses import dataclass, field
from typing import Pattern

from .errors import ConstraintViolationError

# Matches any string, including multi-line ones
PATTERN_DEFAULT = r"^.*$"


@dataclass(frozen=True)
class Regex:
    """
    Regular expression constraint.

    Matching is done against the whole string (``re.fullmatch``), with
    ``re.DOTALL`` so the default pattern accepts multi-line values.

    Attributes:
        pattern: Pattern text, compared verbatim for compatibility
    """

    pattern: str = PATTERN_DEFAULT
    compiled: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not isinstance(self.pattern, str):
            raise TypeError(f"Regex pattern must be a string, got {type(self.pattern).__name__}")
        try:
            compiled = re.compile(self.pattern, re.DOTALL)
        except re.error as e:
            raise ConstraintViolationError(
                f"Invalid regex pattern `{self.pattern}`: {e}",
                constraint=self.pattern,
            ) from e
        object.__setattr__(self, "compiled", compiled)

    def match(self, value: str) -> bool:
        """Return True if the whole ``value`` matches the pattern."""
        return self.compiled.fullmatch(value) is not None

    def __str__(self) -> str:
        return self.pattern
