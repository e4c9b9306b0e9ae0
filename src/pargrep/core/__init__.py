"""
Core search functionality: configuration, data types, the worker pool and
the search orchestrator.
"""

from .api import FileScanOutcome, ParallelSearcher, search
from .config import LARGE_FILE_THRESHOLD, SearchConfig
from .pool import WorkerPool
from .types import MatchSpan, OutputFormat, SearchReport, SearchResult, SearchStats

__all__ = [
    "FileScanOutcome",
    "ParallelSearcher",
    "search",
    "LARGE_FILE_THRESHOLD",
    "SearchConfig",
    "WorkerPool",
    "MatchSpan",
    "OutputFormat",
    "SearchReport",
    "SearchResult",
    "SearchStats",
]
