"""Coverage profile aggregation and per-line classification.

This package provides:
- Go coverage profile parsing
- Canonical path keys shared across profiles
- Sum merge of every profile into per-file tallies
- Hit/Miss/Ignored classification against real source line counts
- Worst-coverage ranking for the hitlist

Usage:
    from legendary.coverage import collect_coverage_context, hitlist, rank

    run = collect_coverage_context("/home/me/go/src", "/home/me/go/src/app", paths)
    rows = hitlist(rank(list(run.context.ordered_results())), limit=10)
"""

from legendary.coverage.aggregate import (
    Aggregator,
    ProfileDelta,
    collect_deltas,
    ingest,
    merge_deltas,
)
from legendary.coverage.classify import classify, classify_all, count_lines
from legendary.coverage.context import CoverageRun, collect_coverage_context
from legendary.coverage.models import (
    Block,
    ClassifiedResult,
    FileTally,
    ProfileFile,
    ReportContext,
)
from legendary.coverage.parsers import GocovParser, parse_profile
from legendary.coverage.paths import canonicalize, relative_path
from legendary.coverage.rank import (
    HitlistRow,
    Ranking,
    compare_miss_count,
    compare_miss_fraction,
    hitlist,
    rank,
)

__all__ = [
    # Models
    "Block",
    "ClassifiedResult",
    "FileTally",
    "ProfileFile",
    "ReportContext",
    # Parsers
    "GocovParser",
    "parse_profile",
    # Paths
    "canonicalize",
    "relative_path",
    # Aggregation
    "Aggregator",
    "ProfileDelta",
    "collect_deltas",
    "ingest",
    "merge_deltas",
    # Classification
    "classify",
    "classify_all",
    "count_lines",
    # Ranking
    "HitlistRow",
    "Ranking",
    "compare_miss_count",
    "compare_miss_fraction",
    "hitlist",
    "rank",
    # Orchestration
    "CoverageRun",
    "collect_coverage_context",
]
