"""legendary CLI - turn Go coverage profiles into vim-legend files or a hitlist."""

from pathlib import Path

import click

from legendary import __version__
from legendary.config import LegendaryConfig, load_config
from legendary.config.constants import REPORT_FORMATS
from legendary.core.errors import ConfigError, InternalError, LegendaryError
from legendary.core.logging import configure_logging, get_log_file_path
from legendary.core.progress import pluralize, status
from legendary.coverage import CoverageRun, collect_coverage_context, rank
from legendary.coverage import hitlist as build_hitlist
from legendary.report import emit, format_hitlist


def _fail(error: LegendaryError) -> click.ClickException:
    message = str(error)
    if log_path := get_log_file_path():
        message += f"\nSee {log_path} for details."
    return click.ClickException(message)


def _report_skipped(run: CoverageRun) -> None:
    if run.profile_errors:
        status(
            f"{pluralize(len(run.profile_errors), 'profile')} skipped or incomplete",
            style="warning",
        )
    if run.source_errors:
        status(
            f"{pluralize(len(run.source_errors), 'source file')} unreadable, left out",
            style="warning",
        )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="legendary")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    metavar="[OUT_PATH] COVERAGE_PATH...",
    type=click.Path(path_type=Path),
)
@click.option(
    "--coverage-root",
    metavar="DIR",
    help="Treat the coverage files as referring to files rooted at DIR. [default: $GOPATH/src]",
)
@click.option(
    "--project-root",
    metavar="DIR",
    help="Emit the report rooted at DIR. [default: current directory]",
)
@click.option(
    "--hitlist",
    is_flag=True,
    help="Don't write a report; print the worst covered files instead.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    help="Limit the number of files in the hitlist to N.",
    metavar="N",
)
@click.option(
    "--format",
    "report_format",
    type=click.Choice(REPORT_FORMATS),
    help="Report format. [default: vim]",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    help="Threads for parsing profiles and reading sources. [default: 1]",
    metavar="N",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    paths: tuple[Path, ...],
    coverage_root: str | None,
    project_root: str | None,
    hitlist: bool,
    limit: int | None,
    report_format: str | None,
    workers: int | None,
    verbose: bool,
) -> None:
    """Parse Go coverage profiles into vim-legend files.

    \b
    legendary [options] OUT_PATH COVERAGE_PATH...
    legendary [options] --hitlist [--limit N] COVERAGE_PATH...
    """
    if limit is not None and not hitlist:
        raise click.UsageError("--limit only applies with --hitlist")
    if not hitlist and len(paths) < 2:
        raise click.UsageError("expected OUT_PATH followed by at least one COVERAGE_PATH")

    try:
        config = load_config(
            Path(project_root) if project_root else None,
            coverage_root=coverage_root,
            project_root=project_root,
            limit=limit,
            workers=workers,
            report_format=report_format,
        )
    except ConfigError as e:
        raise _fail(e) from e

    configure_logging(config.logging, verbose=verbose)

    if hitlist:
        _run_hitlist(config, list(paths))
    else:
        _run_report(config, paths[0], list(paths[1:]))


def _collect(config: LegendaryConfig, profiles: list[Path]) -> CoverageRun:
    try:
        run = collect_coverage_context(
            config.coverage_root or "",
            config.project_root or "",
            profiles,
            max_workers=config.workers,
        )
    except ConfigError as e:
        raise _fail(e) from e
    _report_skipped(run)
    return run


def _run_hitlist(config: LegendaryConfig, profiles: list[Path]) -> None:
    run = _collect(config, profiles)
    ranking = rank(list(run.context.ordered_results()))
    click.echo(format_hitlist(build_hitlist(ranking, config.limit)), nl=False)


def _run_report(config: LegendaryConfig, out_path: Path, profiles: list[Path]) -> None:
    run = _collect(config, profiles)
    try:
        emit(run.context, out_path, report_format=config.report_format)
    except LegendaryError as e:
        raise _fail(e) from e
    except ValueError as e:
        raise _fail(InternalError.unexpected(str(e), report_format=config.report_format)) from e
    status(
        f"Wrote coverage for {pluralize(len(run.context.results), 'file')} to {out_path}",
        style="success",
    )


if __name__ == "__main__":
    cli()
