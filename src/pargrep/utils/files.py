"""
Candidate file enumeration.

Walks the search root and yields every regular file whose extension matches
the filter. Listing errors are not skipped: a directory that cannot be read
makes the whole enumeration fail with ``EnumerationError``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import NoReturn

from .error_handling import EnumerationError
from .logging_config import get_logger


def file_extension(name: str) -> str | None:
    """
    Return the text after the last dot of a file name, without the dot.

    A leading dot does not start an extension, so ``.bashrc`` has none.

    Example:
        >>> file_extension("archive.tar.gz")
        'gz'
        >>> file_extension(".bashrc") is None
        True
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


def should_search_file(path: Path, extension: str | None) -> bool:
    if not path.is_file():
        return False
    if extension is None:
        return True
    return file_extension(path.name) == extension


def _raise_enumeration_error(err: OSError) -> NoReturn:
    where = Path(err.filename) if err.filename else Path(".")
    raise EnumerationError(f"Cannot list directory {where}: {err.strerror or err}", where) from err


def is_decodable_path(path: str) -> bool:
    """False when ``os.walk`` had to surrogate-escape bytes that are not valid UTF-8."""
    try:
        path.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _directory_key(dirpath: str) -> tuple[int, int]:
    try:
        st = os.stat(dirpath)
    except OSError as e:
        _raise_enumeration_error(e)
    return st.st_dev, st.st_ino


def iter_files(
    root: str | Path,
    extension: str | None = None,
    recursive: bool = True,
    follow_symlinks: bool = True,
) -> Iterator[Path]:
    """
    Yield candidate files under ``root``.

    Files whose path is not valid UTF-8 are skipped. When symlinks are
    followed, every real directory is listed at most once, so link cycles end.

    Args:
        root: Directory to search
        extension: Exact, case-sensitive extension without the dot; None for all files
        recursive: Descend into subdirectories
        follow_symlinks: Descend into symlinked directories as well

    Raises:
        EnumerationError: If ``root`` or any visited directory cannot be listed
    """
    logger = get_logger()
    root_path = Path(root)
    seen: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(
        root_path, onerror=_raise_enumeration_error, followlinks=follow_symlinks
    ):
        if follow_symlinks:
            key = _directory_key(dirpath)
            if key in seen:
                dirnames.clear()
                continue
            seen.add(key)

        if recursive:
            dirnames.sort()
        else:
            # only the root's own entries
            dirnames.clear()

        for name in sorted(filenames):
            p = Path(dirpath) / name
            if not is_decodable_path(str(p)):
                logger.debug(f"Skipping {p!r}: path is not valid UTF-8", operation="enumerate")
                continue
            if should_search_file(p, extension):
                yield p


def collect_files(
    root: str | Path,
    extension: str | None = None,
    recursive: bool = True,
    follow_symlinks: bool = True,
) -> list[Path]:
    """Materialize ``iter_files`` so that enumeration fails before any scan starts."""
    return list(iter_files(root, extension, recursive, follow_symlinks))
