"""Go coverage profile parser.

Go test produces coverage profiles with format:
mode: set|count|atomic
<package>/<file>:<startline>.<startcol>,<endline>.<endcol> <numstmt> <count>

Example:
mode: set
github.com/user/pkg/main.go:10.2,12.16 3 1
github.com/user/pkg/main.go:15.2,20.16 5 0

- mode: set (0/1), count (hit count), atomic (thread-safe count)
- numstmt: number of statements in block
- count: execution count (0 = not covered)

Unlike a best-effort reader, a single malformed line rejects the whole
profile: a half-read profile would silently under-report coverage.
"""

import re
from pathlib import Path

from legendary.core.errors import ProfileParseError
from legendary.coverage.models import Block, ProfileFile

_LINE_RE = re.compile(r"^(.+):([0-9]+)\.([0-9]+),([0-9]+)\.([0-9]+) ([0-9]+) ([0-9]+)$")
_MODE_PREFIX = "mode: "


class GocovParser:
    """Parser for Go coverage profiles."""

    def parse(self, path: Path) -> list[ProfileFile]:
        """Parse Go coverage profile into per-file block records."""
        if not path.exists():
            raise ProfileParseError.not_found(str(path))

        try:
            content = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileParseError.unreadable(str(path), str(e)) from e

        mode = ""
        blocks_by_file: dict[str, list[tuple[int, Block]]] = {}

        for line_no, raw in enumerate(content.splitlines(), start=1):
            line = raw.rstrip("\r")
            if not line.strip():
                continue

            if not mode:
                if not line.startswith(_MODE_PREFIX) or line == _MODE_PREFIX:
                    raise ProfileParseError.malformed(str(path), line_no, f"bad mode line: {line!r}")
                mode = line[len(_MODE_PREFIX) :].strip()
                continue

            match = _LINE_RE.match(line)
            if match is None:
                raise ProfileParseError.malformed(
                    str(path), line_no, f"line {line!r} doesn't match expected format"
                )

            file_name = match.group(1)
            start_line, start_col, end_line, end_col, num_stmt, count = (
                int(g) for g in match.groups()[1:]
            )
            blocks_by_file.setdefault(file_name, []).append(
                (
                    line_no,
                    Block(
                        start_line=start_line,
                        start_col=start_col,
                        end_line=end_line,
                        end_col=end_col,
                        num_stmt=num_stmt,
                        count=count,
                    ),
                )
            )

        return [
            ProfileFile(
                file_name=file_name,
                mode=mode,
                blocks=_combine_duplicates(str(path), mode, blocks_by_file[file_name]),
            )
            for file_name in sorted(blocks_by_file)
        ]


def _combine_duplicates(
    path: str, mode: str, blocks: list[tuple[int, Block]]
) -> tuple[Block, ...]:
    """Sort blocks by position and fold blocks reported twice for one position.

    Profiles concatenated from several test binaries repeat blocks; their
    counts are OR-ed in set mode and summed otherwise. ``blocks`` pairs each
    block with the profile line it came from.
    """
    ordered = sorted(blocks, key=lambda item: (item[1].start_line, item[1].start_col))
    combined: list[Block] = []
    for line_no, block in ordered:
        last = combined[-1] if combined else None
        if (
            last is None
            or (last.start_line, last.start_col, last.end_line, last.end_col)
            != (block.start_line, block.start_col, block.end_line, block.end_col)
        ):
            combined.append(block)
            continue
        if last.num_stmt != block.num_stmt:
            raise ProfileParseError.malformed(
                path,
                line_no,
                f"inconsistent NumStmt at {block.start_line}.{block.start_col}: "
                f"changed from {last.num_stmt} to {block.num_stmt}",
            )
        if mode == "set":
            count = last.count | block.count
        else:
            count = last.count + block.count
        combined[-1] = Block(
            start_line=last.start_line,
            start_col=last.start_col,
            end_line=last.end_line,
            end_col=last.end_col,
            num_stmt=last.num_stmt,
            count=count,
        )
    return tuple(combined)
