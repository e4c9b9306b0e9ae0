"""
Pattern compilation for pargrep.

``compile_pattern`` turns the raw search term into a ``Matcher`` once per run;
the Matcher is then shared read-only by every scan task.

A literal term has every regex metacharacter escaped, so ``a.b`` matches only
the text ``a.b``. A regex term is compiled as given. Neither form gets
implicit flags: case-insensitive search lower-cases the searched line, never
the pattern, so a regex such as ``Foo`` cannot match when case-insensitive
search is on.

Example:
    >>> from pargrep.search.matchers import compile_pattern
    >>> matcher = compile_pattern("a.b", use_regex=False)
    >>> matcher.find_spans("a.b axb a.b")
    [(0, 3), (8, 11)]
"""

from __future__ import annotations

from dataclasses import dataclass

import regex as regex_mod  # better regex engine

from ..core.types import MatchSpan
from ..utils.error_handling import InvalidPatternError


@dataclass(frozen=True, slots=True)
class Matcher:
    term: str
    use_regex: bool
    compiled: regex_mod.Pattern

    def find_spans(self, text: str) -> list[MatchSpan]:
        """Return ``(start, end)`` of every non-overlapping match, left to right."""
        # concurrent=True releases the GIL while matching
        return [m.span() for m in self.compiled.finditer(text, concurrent=True)]

    def __str__(self) -> str:
        return self.compiled.pattern


def compile_pattern(term: str, use_regex: bool = False) -> Matcher:
    """
    Compile a search term into a Matcher.

    Args:
        term: The raw search term
        use_regex: Treat the term as a regular expression instead of literal text

    Returns:
        A compiled, immutable Matcher

    Raises:
        InvalidPatternError: If the (escaped or raw) pattern does not compile
    """
    source = term if use_regex else regex_mod.escape(term)
    try:
        compiled = regex_mod.compile(source)
    except regex_mod.error as e:
        raise InvalidPatternError(f"Invalid regex pattern '{term}': {e}", pattern=term) from e
    return Matcher(term=term, use_regex=use_regex, compiled=compiled)
