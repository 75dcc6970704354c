"""Tests for worst-coverage ranking."""

import pytest

from legendary.coverage.models import ClassifiedResult
from legendary.coverage.rank import (
    compare_miss_count,
    compare_miss_fraction,
    hitlist,
    rank,
)


def _result(name: str, hits: int, misses: int) -> ClassifiedResult:
    return ClassifiedResult(
        filename=name,
        total_lines=hits + misses,
        hits=tuple(range(hits)),
        misses=tuple(range(hits, hits + misses)),
    )


@pytest.fixture
def results() -> list[ClassifiedResult]:
    return [
        _result("big.go", hits=80, misses=20),  # 20 missed, 20%
        _result("tiny.go", hits=0, misses=4),  # 4 missed, 100%
        _result("half.go", hits=10, misses=10),  # 10 missed, 50%
        _result("clean.go", hits=5, misses=0),  # 0 missed, 0%
        _result("blank.go", hits=0, misses=0),  # nothing instrumented
    ]


class TestComparators:
    """Tests for the two comparators."""

    def test_miss_count_descending(self) -> None:
        a, b = _result("a", 0, 5), _result("b", 0, 2)
        assert compare_miss_count(a, b) < 0
        assert compare_miss_count(b, a) > 0
        assert compare_miss_count(a, a) == 0

    def test_miss_fraction_descending(self) -> None:
        a, b = _result("a", 1, 1), _result("b", 3, 1)
        assert compare_miss_fraction(a, b) < 0
        assert compare_miss_fraction(b, a) > 0


class TestRank:
    """Tests for rank."""

    def test_by_miss_count(self, results: list[ClassifiedResult]) -> None:
        ranking = rank(results)
        assert [r.filename for r in ranking.by_miss_count] == [
            "big.go",
            "half.go",
            "tiny.go",
            "clean.go",
            "blank.go",
        ]

    def test_by_miss_fraction(self, results: list[ClassifiedResult]) -> None:
        ranking = rank(results)
        assert [r.filename for r in ranking.by_miss_fraction] == [
            "tiny.go",
            "half.go",
            "big.go",
            "clean.go",
            "blank.go",
        ]

    def test_orderings_are_non_increasing(self, results: list[ClassifiedResult]) -> None:
        ranking = rank(results)
        counts = [r.miss_count for r in ranking.by_miss_count]
        fractions = [r.miss_fraction for r in ranking.by_miss_fraction]
        assert counts == sorted(counts, reverse=True)
        assert fractions == sorted(fractions, reverse=True)
        assert all(0.0 <= f <= 1.0 for f in fractions)

    def test_ties_keep_input_order(self) -> None:
        tied = [_result(name, hits=1, misses=1) for name in ("c.go", "a.go", "b.go")]
        for _ in range(5):
            ranking = rank(tied)
            assert [r.filename for r in ranking.by_miss_count] == ["c.go", "a.go", "b.go"]
            assert [r.filename for r in ranking.by_miss_fraction] == ["c.go", "a.go", "b.go"]

    def test_does_not_mutate_input(self, results: list[ClassifiedResult]) -> None:
        before = list(results)
        rank(results)
        assert results == before

    def test_empty(self) -> None:
        ranking = rank([])
        assert len(ranking) == 0
        assert hitlist(ranking) == []


class TestHitlist:
    """Tests for hitlist row pairing and truncation."""

    def test_rows_pair_orderings_positionally(self, results: list[ClassifiedResult]) -> None:
        rows = hitlist(rank(results))
        assert (rows[0].by_count.filename, rows[0].by_fraction.filename) == ("big.go", "tiny.go")
        assert rows[0].miss_percent == 100.0
        assert (rows[2].by_count.filename, rows[2].by_fraction.filename) == ("tiny.go", "big.go")
        assert rows[2].miss_percent == pytest.approx(20.0)

    @pytest.mark.parametrize(("limit", "expected"), [(None, 5), (2, 2), (5, 5), (50, 5), (0, 0)])
    def test_limit(self, results: list[ClassifiedResult], limit: int | None, expected: int) -> None:
        assert len(hitlist(rank(results), limit)) == expected

    def test_negative_limit(self, results: list[ClassifiedResult]) -> None:
        with pytest.raises(ValueError):
            hitlist(rank(results), -1)
