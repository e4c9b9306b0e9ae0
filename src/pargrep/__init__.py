"""
pargrep: parallel line search for directory trees.

Searches every file under a directory for lines matching a literal term or a
regular expression and reports each matching line with its file, line number
and match spans. Small files are read line by line; files over 10 MB are
memory-mapped and their lines matched in parallel on the same worker pool that
scans files.

Main Classes:
    ParallelSearcher: Orchestrates one search over a worker pool
    SearchConfig: Run parameters
    Matcher: Compiled search pattern
    SearchResult: One matching line
    SearchReport: All results of a run with statistics

Example Usage:
    >>> from pargrep import search
    >>> report = search("todo", "src", extension="py")
    >>> for r in report.results:
    ...     print(f"{r.file_path}:{r.line_number} {r.line}")

    CLI usage:
        $ pargrep find --term "todo" --directory src --extension py
"""

from .core.api import FileScanOutcome, ParallelSearcher, search
from .core.config import LARGE_FILE_THRESHOLD, SearchConfig
from .core.pool import WorkerPool
from .core.types import OutputFormat, SearchReport, SearchResult, SearchStats
from .search.matchers import Matcher, compile_pattern
from .search.scanner import scan_file
from .utils.error_handling import (
    BoundaryViolationError,
    ConfigurationError,
    EnumerationError,
    InvalidPatternError,
    ScanError,
    SearchError,
)
from .utils.files import collect_files, iter_files
from .utils.logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "ParallelSearcher",
    "SearchConfig",
    "WorkerPool",
    "Matcher",
    "FileScanOutcome",
    # Data types
    "OutputFormat",
    "SearchResult",
    "SearchStats",
    "SearchReport",
    "LARGE_FILE_THRESHOLD",
    # Functions
    "search",
    "compile_pattern",
    "scan_file",
    "iter_files",
    "collect_files",
    # Logging
    "configure_logging",
    "get_logger",
    "enable_debug_logging",
    "disable_logging",
    # Exceptions
    "SearchError",
    "InvalidPatternError",
    "EnumerationError",
    "ScanError",
    "BoundaryViolationError",
    "ConfigurationError",
    "__version__",
]
