"""
Shared test fixtures and helpers for pargrep tests.
"""

from pathlib import Path

import pytest

from pargrep import SearchConfig, WorkerPool
from pargrep.utils.logging_config import LogLevel, configure_logging

SAMPLE_TEXT = "foo bar\nFOO baz\nnothing here\n"

SAMPLE_CODE = """\
def handler(request):
    # TODO: validate request
    return Response(request.body)

class Response:
    def __init__(self, body):
        self.body = body  # todo: copy?
"""


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep library logging out of captured output."""
    configure_logging(level=LogLevel.WARNING)
    yield


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """A small directory tree with text, markdown and nested files."""
    root = tmp_path / "tree"
    root.mkdir()
    (root / "a.txt").write_text(SAMPLE_TEXT, encoding="utf-8")
    (root / "a.md").write_text("foo in markdown\n", encoding="utf-8")
    (root / "code.py").write_text(SAMPLE_CODE, encoding="utf-8")

    nested = root / "sub" / "deeper"
    nested.mkdir(parents=True)
    (root / "sub" / "b.txt").write_text("another foo\n", encoding="utf-8")
    (nested / "c.txt").write_text("deep foo foo foo\n", encoding="utf-8")
    return root


@pytest.fixture
def pool():
    with WorkerPool(4) as p:
        yield p


@pytest.fixture
def tree_config(sample_tree: Path) -> SearchConfig:
    return SearchConfig(directory=str(sample_tree), threads=2)


class TestDataHelper:
    """Helpers for creating files and comparing results."""

    @staticmethod
    def write_lines(path: Path, lines: list[str], newline: str = "\n") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(newline.join(lines).encode("utf-8") + newline.encode("utf-8"))
        return path

    @staticmethod
    def pad_to_size(path: Path, content: bytes, size: int) -> Path:
        """Write ``content`` followed by filler lines so the file is exactly ``size`` bytes."""
        assert len(content) <= size
        filler = b"x" * (size - len(content))
        if filler:
            filler = b"\n" + filler[1:]
        path.write_bytes(content + filler)
        assert path.stat().st_size == size
        return path

    @staticmethod
    def as_tuples(results) -> list[tuple[str, int, str, tuple]]:
        return [(r.file_path, r.line_number, r.line, r.matches) for r in results]


@pytest.fixture
def test_helper():
    return TestDataHelper()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer to run")
    config.addinivalue_line("markers", "cli: CLI-related tests")
