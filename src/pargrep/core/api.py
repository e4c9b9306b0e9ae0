"""
Main API module for pargrep.

``ParallelSearcher`` runs one search: it enumerates candidate files, fans one
scan task per file out over a ``WorkerPool``, and collects the results as the
tasks finish.

Failure policy:
    - Enumeration errors (``EnumerationError``) are fatal and propagate.
    - A file that cannot be scanned becomes a ``FileScanOutcome`` with an
      error and no results. The error is recorded in the searcher's
      ``ErrorCollector`` and logged at debug level; the run goes on.

Ordering: results of different files arrive in completion order; the lines
of one file are always ascending.

Example:
    >>> from pargrep import SearchConfig, ParallelSearcher, compile_pattern
    >>> config = SearchConfig(directory="src", extension="py")
    >>> matcher = compile_pattern("todo")
    >>> with ParallelSearcher(config) as searcher:
    ...     report = searcher.search(matcher)
    >>> print(f"{report.stats.results} matching lines")
"""

from __future__ import annotations

import time
from collections.abc import Callable
from concurrent.futures import as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..search.matchers import Matcher, compile_pattern
from ..search.scanner import scan_file
from ..utils.error_handling import ErrorCollector, ScanError, handle_file_error
from ..utils.files import collect_files
from ..utils.logging_config import SearchLogger, get_logger
from .config import SearchConfig
from .pool import WorkerPool
from .types import SearchReport, SearchResult, SearchStats

ProgressCallback = Callable[[Path], None]


@dataclass(slots=True)
class FileScanOutcome:
    """Either the results of one file or the error that stopped its scan."""

    path: Path
    results: list[SearchResult] = field(default_factory=list)
    error: ScanError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def results_or_empty(self) -> list[SearchResult]:
        return self.results if self.error is None else []


class ParallelSearcher:
    """
    Search orchestrator.

    Attributes:
        cfg (SearchConfig): Run parameters, read-only for the whole run
        pool (WorkerPool): Worker pool used for files and large-file lines
        logger (SearchLogger): Logging interface
        error_collector (ErrorCollector): Per-file errors absorbed by the last run
    """

    def __init__(
        self,
        config: SearchConfig | None = None,
        pool: WorkerPool | None = None,
        logger: SearchLogger | None = None,
    ) -> None:
        self.cfg = config or SearchConfig()
        self.cfg.validate()
        self._owns_pool = pool is None
        self.pool = pool or WorkerPool(self.cfg.threads)
        self.logger = logger or get_logger()
        self.error_collector = ErrorCollector()

    def __enter__(self) -> ParallelSearcher:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the pool if this searcher created it."""
        if self._owns_pool:
            self.pool.shutdown()

    def collect_files(self) -> list[Path]:
        return collect_files(
            self.cfg.directory,
            extension=self.cfg.extension,
            recursive=self.cfg.recursive,
            follow_symlinks=self.cfg.follow_symlinks,
        )

    def scan_one(self, path: Path, matcher: Matcher) -> FileScanOutcome:
        try:
            results = scan_file(
                path,
                matcher,
                case_sensitive=self.cfg.case_sensitive,
                pool=self.pool,
                threshold=self.cfg.large_file_threshold,
            )
        except ScanError as e:
            return FileScanOutcome(path=path, error=e)
        return FileScanOutcome(path=path, results=results)

    def search(
        self,
        matcher: Matcher,
        files: list[Path] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> SearchReport:
        """
        Scan every candidate file and aggregate the matching lines.

        Args:
            matcher: Compiled pattern shared by all tasks
            files: Candidate files; enumerated from the config when None
            on_progress: Called once per finished file, whatever its outcome

        Returns:
            SearchReport with all results, statistics and absorbed errors

        Raises:
            EnumerationError: If the directory tree cannot be listed
        """
        self.error_collector.clear()
        self.logger.log_search_start(
            pattern=matcher.term,
            directory=self.cfg.directory,
            use_regex=matcher.use_regex,
            case_sensitive=self.cfg.case_sensitive,
        )

        t0 = time.perf_counter()
        if files is None:
            files = self.collect_files()
        self.logger.debug(f"Searching in {len(files)} files with {self.pool.workers} workers")

        results: list[SearchResult] = []
        files_matched = 0
        files_failed = 0

        futures = {self.pool.submit(self.scan_one, p, matcher): p for p in files}
        for future in as_completed(futures):
            outcome = future.result()
            if outcome.error is not None:
                files_failed += 1
                handle_file_error(outcome.error, "scan", self.error_collector, self.logger)
            file_results = outcome.results_or_empty()
            if file_results:
                files_matched += 1
                results.extend(file_results)
            if on_progress is not None:
                on_progress(outcome.path)

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        self.logger.log_search_complete(
            pattern=matcher.term,
            results_count=len(results),
            elapsed_ms=elapsed_ms,
            files_scanned=len(files),
        )

        stats = SearchStats(
            files_scanned=len(files),
            files_matched=files_matched,
            files_failed=files_failed,
            results=len(results),
            elapsed_ms=elapsed_ms,
        )
        return SearchReport(results=results, stats=stats, errors=list(self.error_collector.errors))


def search(
    term: str,
    directory: str = ".",
    *,
    extension: str | None = None,
    recursive: bool = True,
    case_sensitive: bool = False,
    use_regex: bool = False,
    threads: int = 4,
    on_progress: ProgressCallback | None = None,
) -> SearchReport:
    """
    Convenience one-shot search.

    Raises:
        InvalidPatternError: If the term does not compile
        EnumerationError: If the directory tree cannot be listed
        ConfigurationError: If the options are invalid
    """
    cfg = SearchConfig(
        directory=directory,
        extension=extension,
        recursive=recursive,
        case_sensitive=case_sensitive,
        use_regex=use_regex,
        threads=threads,
    )
    matcher = compile_pattern(term, use_regex=use_regex)
    with ParallelSearcher(cfg) as searcher:
        return searcher.search(matcher, on_progress=on_progress)
