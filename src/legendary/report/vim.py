"""vim-legend script rendering.

The script defines the coverage dictionary the vim-legend plugin reads and
hands it to ``AddSimplecovResults``:

    let s:generatedTime = 1700000000
    let s:coverageResults = {
    \\'pkg/main.go': {
    \\  'hits': [4,5,],
    \\  'misses': [8,],
    \\  'ignored': [1,2,3,6,7,],
    \\  },
    \\}
    call AddSimplecovResults(expand("<sfile>:p"), s:coverageResults)

vim numbers lines from 1, so each 0-based index of the classified results is
written as ``index + 1``: a block on profile line 10 marks vim line 10.
"""

from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

import jinja2

from legendary.core.errors import EmitError
from legendary.coverage.models import ReportContext
from legendary.report.artifact import write_artifact

TEMPLATE_NAME = "coverage.vim.j2"


def vim_string(value: str) -> str:
    """Escape ``value`` for a single-quoted vim string literal."""
    return value.replace("'", "''")


def vim_lines(indices: Iterable[int]) -> str:
    """Render 0-based line indices as vim line numbers: ``(0, 1)`` -> ``1,2,``."""
    return "".join(f"{index + 1}," for index in indices)


@lru_cache(maxsize=1)
def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.PackageLoader("legendary", "templates"),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["vim_string"] = vim_string
    env.filters["vim_lines"] = vim_lines
    return env


def render_vim(context: ReportContext) -> str:
    """Render ``context`` as a vim-legend script.

    Raises:
        EmitError: If the template cannot be loaded or rendered.
    """
    try:
        template = _environment().get_template(TEMPLATE_NAME)
        return template.render(
            generated_time=context.generated_time,
            results=list(context.ordered_results()),
        )
    except jinja2.TemplateError as e:
        raise EmitError.render_failed(TEMPLATE_NAME, str(e)) from e


def write_vim(context: ReportContext, path: Path) -> Path:
    """Render and write a vim-legend script to ``path``."""
    return write_artifact(path, render_vim(context))
