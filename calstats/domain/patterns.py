"""
Precompiled title patterns used to ignore events by name.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Pattern, Tuple

from .exceptions import ConfigError


@dataclass(frozen=True)
class PatternMatcher:
    """
    An immutable set of regular expressions matched against whole titles.

    Matching is case-sensitive and anchored at both ends.
    """
    patterns: Tuple[Pattern[str], ...] = field(default_factory=tuple)

    @classmethod
    def compile(cls, expressions: Iterable[str]) -> "PatternMatcher":
        """
        Compile raw expressions into a matcher.

        Raises:
            ConfigError: If an expression is not a valid regular expression
        """
        compiled = []
        for expression in expressions:
            try:
                compiled.append(re.compile(expression))
            except re.error as exc:
                raise ConfigError(f"Invalid ignore pattern {expression!r}: {exc}") from exc
        return cls(patterns=tuple(compiled))

    def matches(self, title: str) -> bool:
        """Check if the title fully matches any pattern."""
        return any(pattern.fullmatch(title) for pattern in self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)
