"""
Line scanning for a single file.

``scan_file`` picks one of two strategies from the file's byte length:

- Small files (``size <= threshold``) are read line by line through a
  buffered binary reader. Each line is decoded strictly as UTF-8, so a
  malformed byte sequence aborts the scan of that file with ``ScanError``.
- Large files (``size > threshold``) are memory-mapped, decoded in one go
  with invalid sequences replaced by U+FFFD, split into lines and matched in
  contiguous chunks across the worker pool. Chunk results are joined in
  chunk order, so lines come back ascending exactly as a sequential scan
  would produce them.

Both strategies split lines the same way: on ``\\n``, dropping one ``\\r``
before it; text after the last newline is a final line only if non-empty.

Case-insensitive search matches against ``line.lower()`` but reports the
original line. Offsets refer to the lower-cased copy; they only fit the
original when lower-casing keeps the length, which holds for ASCII but not
for every code point (``"İ".lower()`` is two characters long).
"""

from __future__ import annotations

import mmap
import os
from collections.abc import Sequence
from pathlib import Path

from ..core.config import LARGE_FILE_THRESHOLD, is_large_file
from ..core.pool import WorkerPool
from ..core.types import SearchResult
from ..utils.error_handling import ErrorCategory, ScanError
from .matchers import Matcher


def split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    tail = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if tail:
        lines.append(tail)
    return lines


def _strip_eol(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


def match_line(
    file_path: str, line_number: int, line: str, matcher: Matcher, case_sensitive: bool
) -> SearchResult | None:
    """Match one line; return a SearchResult carrying the original text, or None."""
    searched = line if case_sensitive else line.lower()
    spans = matcher.find_spans(searched)
    if not spans:
        return None
    return SearchResult(
        file_path=file_path,
        line_number=line_number,
        line=line,
        matches=tuple(spans),
    )


def _match_chunk(
    file_path: str,
    first_line_number: int,
    lines: Sequence[str],
    matcher: Matcher,
    case_sensitive: bool,
) -> list[SearchResult]:
    results: list[SearchResult] = []
    for offset, line in enumerate(lines):
        result = match_line(file_path, first_line_number + offset, line, matcher, case_sensitive)
        if result is not None:
            results.append(result)
    return results


def scan_small_file(path: Path, matcher: Matcher, case_sensitive: bool) -> list[SearchResult]:
    file_path = str(path)
    results: list[SearchResult] = []
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, start=1):
            line = _strip_eol(raw).decode("utf-8")
            result = match_line(file_path, line_number, line, matcher, case_sensitive)
            if result is not None:
                results.append(result)
    return results


def scan_large_file(
    path: Path,
    matcher: Matcher,
    case_sensitive: bool,
    pool: WorkerPool | None = None,
) -> list[SearchResult]:
    file_path = str(path)
    with open(path, "rb") as f, mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mapped:
        text = str(mapped, encoding="utf-8", errors="replace")
    lines = split_lines(text)
    del text

    if pool is None or pool.workers == 1 or len(lines) < 2:
        return _match_chunk(file_path, 1, lines, matcher, case_sensitive)

    chunk_size = max(1, len(lines) // (pool.workers * 4))
    starts = range(0, len(lines), chunk_size)

    chunk_results = pool.map_chunks(
        lambda start: _match_chunk(
            file_path, start + 1, lines[start : start + chunk_size], matcher, case_sensitive
        ),
        starts,
    )
    return [result for chunk in chunk_results for result in chunk]


def scan_file(
    path: Path,
    matcher: Matcher,
    case_sensitive: bool = False,
    pool: WorkerPool | None = None,
    threshold: int = LARGE_FILE_THRESHOLD,
) -> list[SearchResult]:
    """
    Scan one file and return its matching lines in ascending line order.

    Args:
        path: File to scan
        matcher: Shared compiled pattern
        case_sensitive: Match the line verbatim instead of its lower-cased copy
        pool: Worker pool for the large-file line fan-out; sequential if None
        threshold: Byte length above which the large-file strategy is used

    Raises:
        ScanError: If the file cannot be opened, mapped, read or (small files) decoded
    """
    try:
        size = os.stat(path).st_size
        if is_large_file(size, threshold):
            return scan_large_file(path, matcher, case_sensitive, pool)
        return scan_small_file(path, matcher, case_sensitive)
    except UnicodeDecodeError as e:
        raise ScanError(
            f"Invalid UTF-8 in {path}: {e.reason}",
            path,
            category=ErrorCategory.ENCODING,
        ) from e
    except PermissionError as e:
        raise ScanError(
            f"Permission denied: {path}", path, category=ErrorCategory.PERMISSION
        ) from e
    except (OSError, ValueError) as e:
        # ValueError: the file shrank to zero bytes before it could be mapped
        raise ScanError(f"Cannot read {path}: {e}", path) from e
