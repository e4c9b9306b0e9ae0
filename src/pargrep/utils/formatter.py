"""
Output formatting module for pargrep.

Renders a ``SearchReport`` as:

- HIGHLIGHT: rich console output, ``path:line`` followed by the line with every
  match on a yellow background (colors are dropped automatically when stdout
  is not a terminal). Control characters are spelled out (``\\t``, ``\\x0c``)
  because the terminal renderer would otherwise expand or drop them
- TEXT: plain text, matches wrapped in ``[[`` and ``]]``, line text verbatim
- JSON: orjson document with results and statistics; match offsets are
  character (code point) indices into ``line``

Spans are applied in stored order against the original line. A span that is
out of order, overlaps the previous one or runs past the end of the line
(possible when lower-casing changed the line length) is a boundary violation:
that line is printed without highlighting instead of being cut at the wrong
place.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

import orjson
from rich.console import Console
from rich.text import Text

from ..core.types import MatchSpan, OutputFormat, SearchReport, SearchResult
from .error_handling import BoundaryViolationError
from .logging_config import get_logger

NO_MATCHES = "No matches found."

MATCH_STYLE = "on yellow"
PATH_STYLE = "blue"
LINE_NUMBER_STYLE = "yellow"

# rich drops or rewrites these (tabs are expanded, form feeds stripped)
_CONTROL_ESCAPES = {c: f"\\x{c:02x}" for c in [*range(0x20), 0x7F]}
_CONTROL_ESCAPES.update({ord("\t"): "\\t", ord("\n"): "\\n", ord("\r"): "\\r"})


def check_spans(line: str, spans: tuple[MatchSpan, ...] | list[MatchSpan]) -> None:
    """
    Raise BoundaryViolationError unless ``spans`` are ordered, non-overlapping
    and inside ``line``.
    """
    last = 0
    for start, end in spans:
        if start < last or end < start or end > len(line):
            raise BoundaryViolationError(
                f"Match span ({start}, {end}) does not fit a line of length {len(line)}",
                context={"span": (start, end), "line_length": len(line)},
            )
        last = end


def _checked_spans(result: SearchResult) -> tuple[MatchSpan, ...]:
    try:
        check_spans(result.line, result.matches)
    except BoundaryViolationError as e:
        get_logger().debug(
            f"Not highlighting {result.file_path}:{result.line_number}: {e.message}",
            operation="highlight",
        )
        return ()
    return result.matches


def highlight_spans(
    line: str, spans: tuple[MatchSpan, ...] | list[MatchSpan], marker_left: str = "[[", marker_right: str = "]]"
) -> str:
    """Wrap each span in markers. Spans must already be checked."""
    out: list[str] = []
    last = 0
    for a, b in spans:
        out.append(line[last:a])
        out.append(marker_left)
        out.append(line[a:b])
        out.append(marker_right)
        last = b
    out.append(line[last:])
    return "".join(out)


def escape_controls(s: str) -> str:
    """Spell out C0 control characters and DEL, e.g. a tab becomes ``\\t``."""
    return s.translate(_CONTROL_ESCAPES)


def highlight_line(line: str, spans: tuple[MatchSpan, ...] | list[MatchSpan]) -> Text:
    """
    Build a rich Text with each span styled as a match. Spans must already be checked.

    Escaping is applied per segment, after slicing, so the spans keep
    pointing at the original line.
    """
    text = Text()
    last = 0
    for a, b in spans:
        text.append(escape_controls(line[last:a]))
        text.append(escape_controls(line[a:b]), style=MATCH_STYLE)
        last = b
    text.append(escape_controls(line[last:]))
    return text


def render_result(result: SearchResult) -> Text:
    text = Text()
    text.append(escape_controls(result.file_path), style=PATH_STYLE)
    text.append(":")
    text.append(str(result.line_number), style=LINE_NUMBER_STYLE)
    text.append(" ")
    text.append_text(highlight_line(result.line, _checked_spans(result)))
    return text


def render_console(report: SearchReport, console: Console | None = None) -> None:
    """Print the match count and one highlighted line per result."""
    if console is None:
        console = Console()

    if not report.results:
        console.print(Text(NO_MATCHES, style="yellow"))
        return

    header = Text("\n")
    header.append(str(len(report.results)), style="green")
    header.append(" matches found:\n")
    console.print(header)

    for result in report.results:
        console.print(render_result(result), soft_wrap=True)


def format_text(report: SearchReport) -> str:
    if not report.results:
        return NO_MATCHES

    out: list[str] = ["", f"{len(report.results)} matches found:", ""]
    for result in report.results:
        content = highlight_spans(result.line, _checked_spans(result))
        out.append(f"{result.file_path}:{result.line_number} {content}")
    return "\n".join(out)


def to_json_bytes(report: SearchReport) -> bytes:
    """Serialize results and statistics with orjson."""
    payload: dict[str, Any] = {
        "results": [
            {
                "file": r.file_path,
                "line_number": r.line_number,
                "line": r.line,
                "matches": [[a, b] for a, b in r.matches],
            }
            for r in report.results
        ],
        "stats": asdict(report.stats),
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2)


def format_stats(report: SearchReport) -> str:
    s = report.stats
    return (
        f"# files_scanned={s.files_scanned} files_matched={s.files_matched} "
        f"files_failed={s.files_failed} results={s.results} elapsed_ms={s.elapsed_ms:.2f}"
    )


def format_result(report: SearchReport, fmt: OutputFormat) -> str:
    """Format a report as text or JSON. HIGHLIGHT goes through ``render_console``."""
    if fmt == OutputFormat.JSON:
        return to_json_bytes(report).decode("utf-8")
    return format_text(report)
