"""
Command-line interface for pargrep.

Main Commands:
    find: Search a directory tree for a term

Example Usage:
    Case-insensitive literal search of every file under the current directory:
        $ pargrep find --term "todo"

    Regex search of Rust sources only, case-sensitive, 8 threads:
        $ pargrep find -d src -e rs -t "fn \\w+_handler" -x -c -j 8

Exit status is 1 when the pattern does not compile, the directory tree cannot
be listed or the options are invalid; 0 otherwise, including when nothing
matched. Files that cannot be read are skipped silently (see --show-errors).
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from ..core.api import ParallelSearcher
from ..core.config import DEFAULT_THREADS, SearchConfig
from ..core.types import OutputFormat, SearchReport
from ..search.matchers import Matcher, compile_pattern
from ..utils.error_handling import ErrorCollector, SearchError, create_error_report
from ..utils.formatter import format_result, format_stats, render_console
from ..utils.logging_config import LogFormat, LogLevel, configure_logging


@click.group()
@click.version_option(package_name="pargrep")
def cli() -> None:
    """pargrep - parallel line search for directory trees"""
    pass


def _fail(error: SearchError) -> NoReturn:
    console = Console(stderr=True)
    console.print(f"Error: {error.message}", style="red", markup=False, highlight=False)
    for hint in error.suggestions:
        console.print(f"  hint: {hint}", markup=False, highlight=False)
    sys.exit(1)


def _run_with_progress(
    searcher: ParallelSearcher, matcher: Matcher, show_progress: bool
) -> SearchReport:
    files = searcher.collect_files()
    if not show_progress:
        return searcher.search(matcher, files=files)

    progress = Progress(
        SpinnerColumn(style="green"),
        TimeElapsedColumn(),
        BarColumn(complete_style="cyan", finished_style="blue"),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=Console(stderr=True),
        transient=True,
    )
    with progress:
        task_id = progress.add_task("search", total=len(files))
        return searcher.search(
            matcher,
            files=files,
            on_progress=lambda _path: progress.advance(task_id),
        )


@cli.command("find")
@click.option(
    "-d", "--directory", default=".", show_default=True, help="Directory to search in"
)
@click.option(
    "-e", "--extension", default=None, help="Only search files with this extension (no dot)"
)
@click.option("-t", "--term", required=True, help="Term to search for")
@click.option(
    "-r/-R",
    "--recursive/--no-recursive",
    default=True,
    show_default=True,
    help="Search subdirectories",
)
@click.option(
    "--follow-symlinks/--no-follow-symlinks",
    default=True,
    show_default=True,
    help="Descend into symlinked directories",
)
@click.option("-c", "--case-sensitive", is_flag=True, default=False, help="Case-sensitive search")
@click.option("-x", "--regex", is_flag=True, default=False, help="Treat the term as a regex")
@click.option(
    "-j",
    "--threads",
    type=click.IntRange(min=1),
    default=DEFAULT_THREADS,
    show_default=True,
    help="Number of worker threads",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice([e.value for e in OutputFormat]),
    default=OutputFormat.HIGHLIGHT.value,
    show_default=True,
    help="Output format; JSON match offsets are character (code point) indices into the line",
)
@click.option("--no-progress", is_flag=True, default=False, help="Hide the progress bar")
@click.option("--stats", is_flag=True, default=False, help="Print run statistics to stderr")
@click.option(
    "--show-errors", is_flag=True, default=False, help="Report files that could not be scanned"
)
@click.option("--debug", is_flag=True, default=False, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice([lvl.value for lvl in LogLevel]),
    default=LogLevel.WARNING.value,
    show_default=True,
    help="Log level",
)
@click.option("--log-file", default=None, help="Also write logs to this file")
@click.option(
    "--log-format",
    type=click.Choice([f.value for f in LogFormat]),
    default=LogFormat.SIMPLE.value,
    show_default=True,
    help="Log format",
)
def find_cmd(
    directory: str,
    extension: str | None,
    term: str,
    recursive: bool,
    follow_symlinks: bool,
    case_sensitive: bool,
    regex: bool,
    threads: int,
    fmt: str,
    no_progress: bool,
    stats: bool,
    show_errors: bool,
    debug: bool,
    log_level: str,
    log_file: str | None,
    log_format: str,
) -> None:
    """Search files under a directory for lines matching a term."""
    if debug:
        log_level = LogLevel.DEBUG.value

    logger = configure_logging(
        level=LogLevel(log_level),
        format_type=LogFormat(log_format),
        log_file=Path(log_file) if log_file else None,
        enable_file=bool(log_file),
        enable_console=True,
    )

    cfg = SearchConfig(
        directory=directory,
        extension=extension,
        recursive=recursive,
        follow_symlinks=follow_symlinks,
        case_sensitive=case_sensitive,
        use_regex=regex,
        threads=threads,
    )

    try:
        matcher = compile_pattern(term, use_regex=regex)
        with ParallelSearcher(cfg, logger=logger) as searcher:
            show_progress = not no_progress and sys.stderr.isatty()
            report = _run_with_progress(searcher, matcher, show_progress)
            errors = searcher.error_collector
    except SearchError as e:
        _fail(e)

    output = OutputFormat(fmt)
    if output == OutputFormat.HIGHLIGHT:
        render_console(report, Console(highlight=False))
    else:
        sys.stdout.write(format_result(report, output))
        sys.stdout.write("\n")

    if stats:
        sys.stderr.write(format_stats(report) + "\n")

    if show_errors:
        _print_error_report(errors)


def _print_error_report(errors: ErrorCollector) -> None:
    click.echo("\n" + "=" * 50, err=True)
    click.echo(create_error_report(errors), err=True)


def main() -> None:
    cli(prog_name="pargrep")


if __name__ == "__main__":
    main()
