"""
Loading of the ignore list: one title regular expression per line.
"""

from pathlib import Path
from typing import List

from ..domain.exceptions import ConfigError
from ..domain.patterns import PatternMatcher


def load_ignore_patterns(path: Path) -> PatternMatcher:
    """
    Load and compile the ignore list.

    Blank lines and lines starting with ``#`` are skipped; every other line
    is a regular expression matched against the whole event title.

    Args:
        path: Path to the ignore-list file

    Returns:
        PatternMatcher with one pattern per line

    Raises:
        ConfigError: If the file cannot be read or a pattern is invalid
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as exc:
        raise ConfigError(f"Unable to read ignore list {path}: {exc}") from exc

    expressions: List[str] = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        expressions.append(line)

    return PatternMatcher.compile(expressions)
