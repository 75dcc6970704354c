"""Cumulative merging of coverage profiles into per-file tallies.

Every line count is a SUM across blocks and profiles:

- line[i] = sum(block.count for every block covering i, in every profile)

Overlapping blocks, repeated blocks and repeated profiles all add up.
Feeding the same profile twice doubles its counts; callers own the
decision of which profiles to supply.

Ingestion is split into a map step and a reduce step:

- collect_deltas: parse one profile into private per-file counts
- merge_deltas: sum a delta into the shared tally map

The map step touches no shared state, so profiles can be parsed on a thread
pool; the reduce step always runs on the calling thread, in the order the
profiles were supplied.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from legendary.core.errors import LegendaryError, PathResolutionError, ProfileParseError
from legendary.core.logging import get_logger
from legendary.coverage.models import FileTally, ProfileFile
from legendary.coverage.parsers import parse_profile
from legendary.coverage.paths import canonicalize

log = get_logger("coverage.aggregate")

ProfileReader = Callable[[Path], list[ProfileFile]]


@dataclass(slots=True)
class ProfileDelta:
    """Per-file counts contributed by a single profile.

    ``error`` is set when the profile was skipped (parse failure) or cut
    short (path resolution failure); ``files`` then holds whatever was
    collected before the failure.
    """

    profile: Path
    files: dict[str, FileTally] = field(default_factory=dict)
    error: LegendaryError | None = None


def collect_deltas(
    coverage_root: str,
    project_root: str,
    profile_path: Path,
    *,
    reader: ProfileReader = parse_profile,
) -> ProfileDelta:
    """Parse one profile into private per-file line counts.

    Never raises for bad input: a ProfileParseError yields an empty delta, a
    PathResolutionError stops at the offending file and keeps the files
    collected before it. The error is carried on the delta.
    """
    delta = ProfileDelta(profile=profile_path)
    try:
        profile_files = reader(profile_path)
    except ProfileParseError as e:
        delta.error = e
        return delta

    for profile_file in profile_files:
        try:
            key = canonicalize(coverage_root, project_root, profile_file.file_name)
        except PathResolutionError as e:
            delta.error = e
            return delta

        tally = delta.files.get(key)
        if tally is None:
            tally = delta.files[key] = FileTally(filename=key)
        for block in profile_file.blocks:
            tally.add(block)

    return delta


def merge_deltas(tallies: dict[str, FileTally], delta: ProfileDelta) -> None:
    """Sum a profile's delta into the shared tally map (first touch creates)."""
    for key, private in delta.files.items():
        tally = tallies.get(key)
        if tally is None:
            tally = tallies[key] = FileTally(filename=key)
        tally.add_counts(private.counts)


def ingest(
    tallies: dict[str, FileTally],
    coverage_root: str,
    project_root: str,
    profile_path: Path,
    *,
    reader: ProfileReader = parse_profile,
) -> ProfileDelta:
    """Merge one profile into ``tallies`` in place.

    Returns the profile's delta so callers can inspect ``delta.error``.
    """
    delta = collect_deltas(coverage_root, project_root, profile_path, reader=reader)
    merge_deltas(tallies, delta)
    _report(delta)
    return delta


def _report(delta: ProfileDelta) -> None:
    if delta.error is None:
        log.debug("profile_ingested", profile=str(delta.profile), files=len(delta.files))
    elif isinstance(delta.error, ProfileParseError):
        log.warning(
            "profile_skipped",
            profile=str(delta.profile),
            error=delta.error.error_name,
            reason=delta.error.message,
        )
    else:
        log.warning(
            "profile_truncated",
            profile=str(delta.profile),
            files_merged=len(delta.files),
            error=delta.error.error_name,
            reason=delta.error.message,
        )


class Aggregator:
    """Owns the tally map for one run and feeds profiles into it."""

    def __init__(
        self,
        coverage_root: str,
        project_root: str,
        *,
        max_workers: int = 1,
        reader: ProfileReader = parse_profile,
    ) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.coverage_root = coverage_root
        self.project_root = project_root
        self.max_workers = max_workers
        self.tallies: dict[str, FileTally] = {}
        self.errors: list[LegendaryError] = []
        self._reader = reader

    def ingest(self, profile_path: Path) -> ProfileDelta:
        """Merge a single profile."""
        delta = ingest(
            self.tallies,
            self.coverage_root,
            self.project_root,
            profile_path,
            reader=self._reader,
        )
        if delta.error is not None:
            self.errors.append(delta.error)
        return delta

    def ingest_all(self, profile_paths: Iterable[Path]) -> dict[str, FileTally]:
        """Merge every profile, in order.

        With more than one worker, profiles are parsed concurrently and
        merged on this thread in the supplied order.
        """
        paths = list(profile_paths)
        if self.max_workers == 1 or len(paths) < 2:
            for path in paths:
                self.ingest(path)
            return self.tallies

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            deltas = pool.map(self._collect, paths)
            for delta in deltas:
                merge_deltas(self.tallies, delta)
                _report(delta)
                if delta.error is not None:
                    self.errors.append(delta.error)
        return self.tallies

    def _collect(self, profile_path: Path) -> ProfileDelta:
        return collect_deltas(
            self.coverage_root, self.project_root, profile_path, reader=self._reader
        )
