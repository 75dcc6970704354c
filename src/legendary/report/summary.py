"""Structured JSON report generation.

Output schema for build_summary:
{
    "generated_at": str,          # ISO 8601, UTC
    "generated_time": int,        # Unix seconds
    "summary": {
        "total_files": int,
        "total_lines": int,
        "hit_lines": int,
        "missed_lines": int,
        "ignored_lines": int,
        "coverage_percent": float  # hit / (hit + missed), 100.0 when nothing instrumented
    },
    "files": [
        {
            "path": str,
            "total_lines": int,
            "hits": [int, ...],       # 0-based line indices
            "misses": [int, ...],
            "ignored": [int, ...],
            "miss_count": int,
            "miss_percent": float
        },
        ...
    ]
}

Files are listed in canonical path order.
"""

import json
from pathlib import Path
from typing import Any

from legendary.coverage.models import ClassifiedResult, ReportContext
from legendary.report.artifact import write_artifact


def compute_file_stats(result: ClassifiedResult) -> dict[str, Any]:
    """Per-file entry of the JSON report."""
    return {
        "path": result.filename,
        "total_lines": result.total_lines,
        "hits": list(result.hits),
        "misses": list(result.misses),
        "ignored": list(result.ignored),
        "miss_count": result.miss_count,
        "miss_percent": round(result.miss_fraction * 100.0, 2),
    }


def build_summary(context: ReportContext) -> dict[str, Any]:
    """Build a structured summary of a report context.

    Args:
        context: The classified results to summarize.

    Returns:
        Structured dict suitable for JSON serialization.
    """
    results = list(context.ordered_results())

    hit_lines = sum(r.hit_count for r in results)
    missed_lines = sum(r.miss_count for r in results)
    ignored_lines = sum(len(r.ignored) for r in results)
    instrumented = hit_lines + missed_lines
    coverage_percent = (hit_lines / instrumented * 100.0) if instrumented > 0 else 100.0

    return {
        "generated_at": context.generated_at.isoformat(),
        "generated_time": context.generated_time,
        "summary": {
            "total_files": len(results),
            "total_lines": sum(r.total_lines for r in results),
            "hit_lines": hit_lines,
            "missed_lines": missed_lines,
            "ignored_lines": ignored_lines,
            "coverage_percent": round(coverage_percent, 2),
        },
        "files": [compute_file_stats(r) for r in results],
    }


def render_json(context: ReportContext) -> str:
    return json.dumps(build_summary(context), indent=2) + "\n"


def write_json(context: ReportContext, path: Path) -> Path:
    """Render and write the JSON report to ``path``."""
    return write_artifact(path, render_json(context))
