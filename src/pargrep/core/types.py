"""
Core data types for pargrep.

Key Types:
    OutputFormat: Supported output formats
    MatchSpan: Half-open ``(start, end)`` offsets of one match within a line
    SearchResult: One matching line
    SearchStats: Counters and timing for one run
    SearchReport: All results of one run plus statistics and absorbed errors

Match offsets are ``str`` indices into the text the matcher saw. When the
search was case-insensitive that text is the lower-cased copy of the line, so
the offsets only line up with ``SearchResult.line`` when lower-casing keeps the
length unchanged (always true for ASCII).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..utils.error_handling import ErrorInfo


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    HIGHLIGHT = "highlight"


MatchSpan = tuple[int, int]


@dataclass(frozen=True, slots=True)
class SearchResult:
    file_path: str
    line_number: int
    line: str
    matches: tuple[MatchSpan, ...]


@dataclass(slots=True)
class SearchStats:
    files_scanned: int = 0
    files_matched: int = 0
    files_failed: int = 0
    results: int = 0
    elapsed_ms: float = 0.0


@dataclass(slots=True)
class SearchReport:
    results: list[SearchResult] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    errors: list[ErrorInfo] = field(default_factory=list)
