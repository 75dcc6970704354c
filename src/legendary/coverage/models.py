"""Coverage data model.

File-centric model: profiles are decoded into blocks, blocks are summed into
one mutable tally per source file, and each tally is frozen into a
classified result once the real line count of the file is known.

Line numbering: profile blocks carry the profile's 1-based line numbers.
Tallies and classified results use 0-based line indices, so profile line
``n`` is index ``n - 1``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Block:
    """A contiguous run of lines sharing one execution count.

    Positions are as reported by the profile (1-based lines, inclusive end).
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def line_indices(self) -> range:
        """0-based line indices covered by this block.

        Line 0 is not a real profile line; it is read as line 1, so a block
        reported as ``0-0`` still covers index 0.
        """
        return range(max(self.start_line, 1) - 1, max(self.end_line, 1))


@dataclass(frozen=True, slots=True)
class ProfileFile:
    """All blocks one profile reports for one file name."""

    file_name: str  # as reported, before canonicalization
    mode: str
    blocks: tuple[Block, ...] = ()


@dataclass(slots=True)
class FileTally:
    """Cumulative execution counts for one canonical source file.

    ``counts`` maps 0-based line index → summed execution count. A line
    absent from ``counts`` was never instrumented; a line present with 0 was
    instrumented but not executed.
    """

    filename: str  # canonical path
    counts: dict[int, int] = field(default_factory=dict)

    def add(self, block: Block) -> None:
        """Sum a block's count into every line it covers."""
        for index in block.line_indices:
            self.counts[index] = self.counts.get(index, 0) + block.count

    def add_counts(self, counts: dict[int, int]) -> None:
        """Sum per-line counts (e.g. a private delta) into this tally."""
        for index, count in counts.items():
            self.counts[index] = self.counts.get(index, 0) + count


@dataclass(frozen=True, slots=True)
class ClassifiedResult:
    """Per-line classification of one source file.

    ``hits``, ``misses`` and ``ignored`` hold ascending 0-based line indices
    and together partition ``range(total_lines)``.
    """

    filename: str
    total_lines: int
    hits: tuple[int, ...] = ()
    misses: tuple[int, ...] = ()
    ignored: tuple[int, ...] = ()

    @property
    def hit_count(self) -> int:
        return len(self.hits)

    @property
    def miss_count(self) -> int:
        return len(self.misses)

    @property
    def miss_fraction(self) -> float:
        """Fraction of instrumented lines never executed (0.0 to 1.0).

        Files with no instrumented lines have a fraction of 0.0.
        """
        instrumented = self.hit_count + self.miss_count
        if instrumented == 0:
            return 0.0
        return self.miss_count / instrumented


@dataclass(frozen=True, slots=True)
class ReportContext:
    """Everything a report emitter needs.

    Results are keyed by canonical path. Emitters iterate
    ``ordered_results()`` so output order never depends on ingestion order.
    """

    generated_at: datetime
    results: dict[str, ClassifiedResult] = field(default_factory=dict)

    @property
    def generated_time(self) -> int:
        """Generation time as whole Unix seconds."""
        return int(self.generated_at.timestamp())

    def ordered_results(self) -> Iterator[ClassifiedResult]:
        for path in sorted(self.results):
            yield self.results[path]
