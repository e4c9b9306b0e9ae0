"""
Pattern compilation and per-file line scanning.
"""

from .matchers import Matcher, compile_pattern
from .scanner import match_line, scan_file, scan_large_file, scan_small_file, split_lines

__all__ = [
    "Matcher",
    "compile_pattern",
    "match_line",
    "scan_file",
    "scan_large_file",
    "scan_small_file",
    "split_lines",
]
