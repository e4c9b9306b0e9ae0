"""End-to-end tests across enumeration, both scan strategies and rendering."""

from __future__ import annotations

from pathlib import Path

import pytest

from pargrep import ParallelSearcher, SearchConfig, compile_pattern
from pargrep.core.types import OutputFormat
from pargrep.utils.formatter import format_result

pytestmark = pytest.mark.integration


def _key(report):
    return sorted((Path(r.file_path).name, r.line_number, r.line, r.matches) for r in report.results)


@pytest.fixture
def mixed_tree(tmp_path: Path, test_helper) -> Path:
    root = tmp_path / "mixed"
    for i in range(12):
        lines = [f"entry {n} {'ERROR disk full' if n % 11 == 0 else 'ok'}" for n in range(300)]
        test_helper.write_lines(root / f"logs/day{i:02d}.log", lines)
    test_helper.write_lines(root / "notes.txt", ["error in notes", "fine"])
    (root / "broken.log").write_bytes(b"ERROR \xff\xfe\n")
    return root


class TestEndToEnd:
    def test_strategy_does_not_change_results(self, mixed_tree: Path):
        pattern = compile_pattern("error")
        base = dict(directory=str(mixed_tree), extension="log", threads=3)

        with ParallelSearcher(SearchConfig(**base)) as searcher:
            buffered = searcher.search(pattern)
        with ParallelSearcher(SearchConfig(**base, large_file_threshold=5)) as searcher:
            mapped = searcher.search(pattern)

        buffered_keys = [k for k in _key(buffered) if k[0] != "broken.log"]
        mapped_keys = [k for k in _key(mapped) if k[0] != "broken.log"]
        assert buffered_keys == mapped_keys
        assert len(buffered_keys) == 12 * len(range(0, 300, 11))

        # strict decoding skips the invalid file, lossy decoding keeps it
        assert buffered.stats.files_failed == 1
        assert mapped.stats.files_failed == 0

    def test_regex_across_tree(self, mixed_tree: Path):
        pattern = compile_pattern(r"entry \d*0 ", use_regex=True)
        cfg = SearchConfig(directory=str(mixed_tree), extension="log", case_sensitive=True, threads=2)
        with ParallelSearcher(cfg) as searcher:
            report = searcher.search(pattern)
        assert report.stats.results == 12 * 30
        assert all(r.line.split()[1].endswith("0") for r in report.results)

    def test_text_output_lists_every_result(self, mixed_tree: Path):
        cfg = SearchConfig(directory=str(mixed_tree), extension="txt")
        with ParallelSearcher(cfg) as searcher:
            report = searcher.search(compile_pattern("error"))
        out = format_result(report, OutputFormat.TEXT).splitlines()
        assert out[1] == "1 matches found:"
        assert out[3].endswith("notes.txt:1 [[error]] in notes")
