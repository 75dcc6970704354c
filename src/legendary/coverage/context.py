"""End-to-end collection: profiles in, report context out."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from legendary.core.errors import ConfigError, LegendaryError, SourceReadError
from legendary.core.logging import get_logger
from legendary.coverage.aggregate import Aggregator, ProfileReader
from legendary.coverage.classify import classify_all
from legendary.coverage.models import ReportContext
from legendary.coverage.parsers import parse_profile

log = get_logger("coverage.context")


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class CoverageRun:
    """A report context plus the per-profile and per-file errors behind it."""

    context: ReportContext
    profile_errors: list[LegendaryError] = field(default_factory=list)
    source_errors: list[SourceReadError] = field(default_factory=list)


def collect_coverage_context(
    coverage_root: str,
    project_root: str,
    profile_paths: Iterable[Path],
    *,
    max_workers: int = 1,
    reader: ProfileReader = parse_profile,
    clock: Callable[[], datetime] = _utc_now,
) -> CoverageRun:
    """Ingest every profile, classify every file, and stamp the result.

    Bad profiles and unreadable sources are skipped and reported on the
    returned run; they never abort collection.

    Raises:
        ConfigError: If either root is empty.
    """
    if not coverage_root:
        raise ConfigError.missing_required("coverage_root")
    if not project_root:
        raise ConfigError.missing_required("project_root")

    aggregator = Aggregator(coverage_root, project_root, max_workers=max_workers, reader=reader)
    tallies = aggregator.ingest_all(profile_paths)
    results, source_errors = classify_all(tallies, project_root, max_workers=max_workers)

    log.debug(
        "coverage_collected",
        files=len(results),
        profiles_with_errors=len(aggregator.errors),
        sources_dropped=len(source_errors),
    )
    return CoverageRun(
        context=ReportContext(generated_at=clock(), results=results),
        profile_errors=list(aggregator.errors),
        source_errors=source_errors,
    )
