"""Worst-coverage ranking for the hitlist report.

Two independent orderings over the same results:

- by_miss_count:    most missed lines first
- by_miss_fraction: highest share of missed instrumented lines first

Both are stable: files with equal keys keep their input order, so a given
input always produces the same table.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from legendary.coverage.models import ClassifiedResult

Comparator = Callable[[ClassifiedResult, ClassifiedResult], int]


def _descending(a: float, b: float) -> int:
    return (a < b) - (a > b)


def compare_miss_count(a: ClassifiedResult, b: ClassifiedResult) -> int:
    """Order by missed line count, descending."""
    return _descending(a.miss_count, b.miss_count)


def compare_miss_fraction(a: ClassifiedResult, b: ClassifiedResult) -> int:
    """Order by missed line fraction, descending."""
    return _descending(a.miss_fraction, b.miss_fraction)


def order_by(results: Sequence[ClassifiedResult], compare: Comparator) -> list[ClassifiedResult]:
    """Stable sort of ``results`` under ``compare``."""
    return sorted(results, key=cmp_to_key(compare))


@dataclass(frozen=True, slots=True)
class Ranking:
    by_miss_count: tuple[ClassifiedResult, ...]
    by_miss_fraction: tuple[ClassifiedResult, ...]

    def __len__(self) -> int:
        return len(self.by_miss_count)


@dataclass(frozen=True, slots=True)
class HitlistRow:
    """Row i pairs the i-th worst file by count with the i-th worst by fraction.

    The two files are generally different.
    """

    by_count: ClassifiedResult
    by_fraction: ClassifiedResult

    @property
    def miss_percent(self) -> float:
        return self.by_fraction.miss_fraction * 100


def rank(results: Sequence[ClassifiedResult]) -> Ranking:
    """Build both orderings over ``results``."""
    return Ranking(
        by_miss_count=tuple(order_by(results, compare_miss_count)),
        by_miss_fraction=tuple(order_by(results, compare_miss_fraction)),
    )


def hitlist(ranking: Ranking, limit: int | None = None) -> list[HitlistRow]:
    """Pair the two orderings positionally, truncated to ``limit`` rows.

    ``None`` or a limit beyond the number of files yields every row.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    rows = [
        HitlistRow(by_count=by_count, by_fraction=by_fraction)
        for by_count, by_fraction in zip(
            ranking.by_miss_count, ranking.by_miss_fraction, strict=True
        )
    ]
    return rows if limit is None else rows[:limit]
