"""Tests for the JSON report."""

import json
from datetime import UTC, datetime
from pathlib import Path

from legendary.coverage.models import ClassifiedResult, ReportContext
from legendary.report.summary import build_summary, compute_file_stats, write_json

GENERATED = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def _context() -> ReportContext:
    return ReportContext(
        generated_at=GENERATED,
        results={
            "b.go": ClassifiedResult(
                filename="b.go", total_lines=4, hits=(0,), misses=(1, 2), ignored=(3,)
            ),
            "a.go": ClassifiedResult(filename="a.go", total_lines=2, hits=(0, 1)),
        },
    )


class TestComputeFileStats:
    """Tests for compute_file_stats."""

    def test_entry(self) -> None:
        result = ClassifiedResult(
            filename="b.go", total_lines=4, hits=(0,), misses=(1, 2), ignored=(3,)
        )
        assert compute_file_stats(result) == {
            "path": "b.go",
            "total_lines": 4,
            "hits": [0],
            "misses": [1, 2],
            "ignored": [3],
            "miss_count": 2,
            "miss_percent": 66.67,
        }


class TestBuildSummary:
    """Tests for build_summary."""

    def test_totals(self) -> None:
        summary = build_summary(_context())
        assert summary["generated_at"] == "2024-05-01T12:00:00+00:00"
        assert summary["summary"] == {
            "total_files": 2,
            "total_lines": 6,
            "hit_lines": 3,
            "missed_lines": 2,
            "ignored_lines": 1,
            "coverage_percent": 60.0,
        }

    def test_files_in_path_order(self) -> None:
        summary = build_summary(_context())
        assert [f["path"] for f in summary["files"]] == ["a.go", "b.go"]

    def test_nothing_instrumented(self) -> None:
        summary = build_summary(ReportContext(generated_at=GENERATED))
        assert summary["summary"]["coverage_percent"] == 100.0
        assert summary["files"] == []

    def test_write_json_round_trips(self, tmp_path: Path) -> None:
        out = write_json(_context(), tmp_path / "coverage.json")
        assert json.loads(out.read_text()) == build_summary(_context())
