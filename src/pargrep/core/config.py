"""
Configuration module for pargrep.

``SearchConfig`` holds the resolved parameters of one run. It is built once
(by the CLI or by library code), validated, and then only read: every worker
thread sees the same instance and none of them mutates it.

Example:
    >>> from pargrep.core.config import SearchConfig
    >>> config = SearchConfig(directory="src", extension="py", threads=8)
    >>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.error_handling import ConfigurationError

# Files strictly larger than this many bytes are memory-mapped and matched in parallel.
LARGE_FILE_THRESHOLD = 10_000_000

DEFAULT_THREADS = 4


def is_large_file(size: int, threshold: int = LARGE_FILE_THRESHOLD) -> bool:
    return size > threshold


@dataclass(slots=True)
class SearchConfig:
    # Scope
    directory: str = "."
    extension: str | None = None  # no leading dot, compared case-sensitively
    recursive: bool = True
    follow_symlinks: bool = True

    # Matching
    case_sensitive: bool = False
    use_regex: bool = False

    # Performance
    threads: int = DEFAULT_THREADS
    large_file_threshold: int = LARGE_FILE_THRESHOLD

    def validate(self) -> None:
        """Validate configuration and raise ConfigurationError on issues.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        if not self.directory:
            raise ConfigurationError(
                "A search directory must be specified",
                context={"field": "directory"},
            )

        if self.threads < 1:
            raise ConfigurationError(
                "Thread count must be at least 1",
                context={"field": "threads", "value": self.threads},
            )

        if self.large_file_threshold < 0:
            raise ConfigurationError(
                "Large file threshold must be non-negative",
                context={"field": "large_file_threshold", "value": self.large_file_threshold},
            )

        if self.extension is not None and (not self.extension or self.extension.startswith(".")):
            raise ConfigurationError(
                "Extension must be given without the leading dot, e.g. 'txt'",
                context={"field": "extension", "value": self.extension},
            )
