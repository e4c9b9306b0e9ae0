"""
Error taxonomy and collection for pargrep.

Errors fall into two groups. Fatal errors stop the whole run before any result
is shown: an invalid pattern, a directory that cannot be listed, or an invalid
configuration. Per-file errors are absorbed by the orchestrator: the file that
failed simply contributes no results, and the error is kept in an
``ErrorCollector`` so it can be reported on request.

Classes:
    ErrorSeverity: Error severity levels (LOW, MEDIUM, HIGH, CRITICAL)
    ErrorCategory: Error classification categories
    ErrorInfo: Detailed error information container
    SearchError: Base exception class for pargrep errors
    ErrorCollector: Collection of absorbed per-file errors

Functions:
    handle_file_error: Record and log an absorbed per-file failure
    create_error_report: Render collected errors as text

Example:
    >>> from pargrep.utils.error_handling import ErrorCollector, ScanError, handle_file_error
    >>> collector = ErrorCollector()
    >>> handle_file_error(ScanError("Cannot read missing.txt", Path("missing.txt")), "scan", collector)
    >>> print(create_error_report(collector))
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    FILE_ACCESS = "file_access"
    PERMISSION = "permission"
    ENCODING = "encoding"
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    UNKNOWN = "unknown"


@dataclass
class ErrorInfo:
    """Detailed error information."""

    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    file_path: Path | None = None
    context: dict[str, Any] = field(default_factory=dict)


class SearchError(Exception):
    """Base exception for search-related errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        file_path: Path | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.file_path: Path | None = file_path
        self.suggestions: list[str] = suggestions or []
        self.context: dict[str, Any] = context or {}


class InvalidPatternError(SearchError):
    """The search term could not be compiled into a regular expression."""

    def __init__(self, message: str, pattern: str, context: dict[str, Any] | None = None) -> None:
        merged_context: dict[str, Any] = {}
        if context:
            merged_context.update(context)
        merged_context["pattern"] = pattern

        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.CRITICAL,
            suggestions=[
                "Check the regular expression syntax",
                "Drop --regex to search for the term literally",
            ],
            context=merged_context,
        )
        self.pattern: str = pattern


class EnumerationError(SearchError):
    """A directory could not be listed while collecting candidate files."""

    def __init__(
        self, message: str, file_path: Path, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.FILE_ACCESS,
            severity=ErrorSeverity.CRITICAL,
            file_path=file_path,
            suggestions=[
                "Check that the directory exists",
                "Check directory permissions",
            ],
            context=context,
        )


class ScanError(SearchError):
    """A single file could not be opened, mapped, read or decoded."""

    def __init__(
        self,
        message: str,
        file_path: Path,
        category: ErrorCategory = ErrorCategory.FILE_ACCESS,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            category=category,
            severity=ErrorSeverity.LOW,
            file_path=file_path,
            context=context,
        )


class BoundaryViolationError(SearchError):
    """Match offsets do not fit the original line text."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            suggestions=["Use --case-sensitive for text whose lower case changes length"],
            context=context,
        )


class ConfigurationError(SearchError):
    """Configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            suggestions=["Check command-line options"],
            context=context,
        )


class ErrorCollector:
    """Collects errors absorbed during a search. Safe to share between worker threads."""

    def __init__(self, max_errors: int = 100) -> None:
        self.max_errors = max_errors
        self.errors: list[ErrorInfo] = []
        self.error_counts: dict[ErrorCategory, int] = {}
        self._lock = threading.Lock()

    def add_error(self, error: SearchError) -> None:
        """Add an error to the collection; past ``max_errors`` it is only counted."""
        error_info = ErrorInfo(
            category=error.category,
            severity=error.severity,
            message=error.message,
            file_path=error.file_path,
            context=dict(error.context),
        )

        with self._lock:
            if len(self.errors) < self.max_errors:
                self.errors.append(error_info)
            self.error_counts[error.category] = self.error_counts.get(error.category, 0) + 1

    def get_summary(self) -> dict[str, Any]:
        """Get error summary statistics."""
        with self._lock:
            return {
                "total_errors": sum(self.error_counts.values()),
                "by_category": {k.value: v for k, v in self.error_counts.items()},
            }

    def clear(self) -> None:
        """Clear all collected errors."""
        with self._lock:
            self.errors.clear()
            self.error_counts.clear()


def handle_file_error(
    error: ScanError,
    operation: str,
    error_collector: ErrorCollector | None = None,
    logger: Any | None = None,
) -> None:
    """
    Record an absorbed per-file failure and log it.

    Args:
        error: The ScanError that stopped the scan of one file
        operation: Operation being performed (e.g., "scan")
        error_collector: Optional error collector to add the error to
        logger: Optional SearchLogger to log the error
    """
    if error_collector is not None:
        error_collector.add_error(error)

    if logger is not None:
        logger.log_file_error(str(error.file_path), error.message, operation=operation)


def create_error_report(error_collector: ErrorCollector) -> str:
    """Create a human-readable error report."""
    if not error_collector.errors:
        return "No errors occurred during the search operation."

    summary = error_collector.get_summary()

    report = ["Search Error Report", "=" * 50, ""]
    report.append(f"Total errors: {summary['total_errors']}")
    report.append("")

    report.append("Errors by category:")
    for category, count in summary["by_category"].items():
        report.append(f"  {category}: {count}")
    report.append("")

    report.append("Skipped files:")
    for error in error_collector.errors:
        where = f"{error.file_path}: " if error.file_path else ""
        report.append(f"  - {where}{error.message}")

    return "\n".join(report)
