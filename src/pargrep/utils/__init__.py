"""
Utility modules: errors, logging, file enumeration and output formatting.
"""

from .error_handling import (
    BoundaryViolationError,
    ConfigurationError,
    EnumerationError,
    ErrorCollector,
    InvalidPatternError,
    ScanError,
    SearchError,
    create_error_report,
    handle_file_error,
)
from .files import collect_files, file_extension, iter_files
from .formatter import format_result, highlight_line, highlight_spans, render_console
from .logging_config import configure_logging, disable_logging, enable_debug_logging, get_logger

__all__ = [
    # Error handling
    "BoundaryViolationError",
    "ConfigurationError",
    "EnumerationError",
    "ErrorCollector",
    "InvalidPatternError",
    "ScanError",
    "SearchError",
    "create_error_report",
    "handle_file_error",
    # Files
    "collect_files",
    "file_extension",
    "iter_files",
    # Formatting
    "format_result",
    "highlight_line",
    "highlight_spans",
    "render_console",
    # Logging
    "configure_logging",
    "disable_logging",
    "enable_debug_logging",
    "get_logger",
]
