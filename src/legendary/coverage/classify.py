"""Per-line classification of tallied source files.

Each line index of a source file lands in exactly one bucket:

- Ignored: the line never appears in any profile block
- Hit:     summed execution count > 0
- Miss:    summed execution count == 0

A file whose source cannot be read is dropped whole; it never appears
partially classified.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from legendary.config.constants import LINE_COUNT_CHUNK_BYTES
from legendary.core.errors import SourceReadError
from legendary.core.logging import get_logger
from legendary.coverage.models import ClassifiedResult, FileTally

log = get_logger("coverage.classify")


def count_lines(path: Path) -> int:
    """Count the lines of a file.

    Every ``\\n`` ends a line. A non-empty final line without a trailing
    newline still counts, so ``"a\\nb"`` and ``"a\\nb\\n"`` both have two
    lines and an empty file has none.

    Raises:
        SourceReadError: If the file cannot be opened or read.
    """
    count = 0
    last = b""
    try:
        with path.open("rb") as f:
            while chunk := f.read(LINE_COUNT_CHUNK_BYTES):
                count += chunk.count(b"\n")
                last = chunk[-1:]
    except OSError as e:
        raise SourceReadError.from_os_error(str(path), e) from e

    if last and last != b"\n":
        count += 1
    return count


def classify(tally: FileTally, project_root: str | Path) -> ClassifiedResult:
    """Classify every line of ``tally``'s source file.

    Raises:
        SourceReadError: If the source file cannot be read.
    """
    total_lines = count_lines(Path(project_root) / tally.filename)

    hits: list[int] = []
    misses: list[int] = []
    ignored: list[int] = []
    for index in range(total_lines):
        count = tally.counts.get(index)
        if count is None:
            ignored.append(index)
        elif count > 0:
            hits.append(index)
        else:
            misses.append(index)

    overflow = sum(1 for index in tally.counts if index >= total_lines)
    if overflow:
        log.debug(
            "counts_past_end_of_file",
            file=tally.filename,
            total_lines=total_lines,
            lines=overflow,
        )

    return ClassifiedResult(
        filename=tally.filename,
        total_lines=total_lines,
        hits=tuple(hits),
        misses=tuple(misses),
        ignored=tuple(ignored),
    )


def _try_classify(
    tally: FileTally, project_root: str | Path
) -> ClassifiedResult | SourceReadError:
    try:
        return classify(tally, project_root)
    except SourceReadError as e:
        return e


def classify_all(
    tallies: dict[str, FileTally],
    project_root: str | Path,
    *,
    max_workers: int = 1,
) -> tuple[dict[str, ClassifiedResult], list[SourceReadError]]:
    """Classify every tally, dropping files whose source can't be read.

    Failing entries are removed from ``tallies`` and reported as warnings.
    Files are independent of one another, so with ``max_workers > 1`` they
    are classified on a thread pool.

    Returns:
        (results keyed by canonical path, errors for dropped files)
    """
    keys = list(tallies)
    if max_workers > 1 and len(keys) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(lambda k: _try_classify(tallies[k], project_root), keys))
    else:
        outcomes = [_try_classify(tallies[k], project_root) for k in keys]

    results: dict[str, ClassifiedResult] = {}
    errors: list[SourceReadError] = []
    for key, outcome in zip(keys, outcomes, strict=True):
        if isinstance(outcome, SourceReadError):
            del tallies[key]
            errors.append(outcome)
            log.warning(
                "source_dropped",
                file=key,
                error=outcome.error_name,
                reason=outcome.message,
            )
        else:
            results[key] = outcome
    return results, errors
