"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides a small GOPATH-style tree for coverage tests:

    <tmp>/gopath/src/                      coverage root
    <tmp>/gopath/src/example.com/app/      project root
"""

import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

PACKAGE = "example.com/app"


@pytest.fixture(autouse=True)
def _stderr_logging() -> Iterator[None]:
    """Route structlog through the stdlib handlers the command installs."""
    from legendary.config.models import LoggingConfig
    from legendary.core.logging import configure_logging

    configure_logging(LoggingConfig(level="WARNING"))
    yield


@dataclass
class GoTree:
    """Coverage root, project root and helpers to populate them."""

    coverage_root: Path
    project_root: Path
    profiles_dir: Path

    def source(self, name: str, n_lines: int, *, trailing_newline: bool = True) -> Path:
        """Write a project source file with ``n_lines`` lines."""
        path = self.project_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        body = "\n".join(f"line {i}" for i in range(1, n_lines + 1))
        if trailing_newline and n_lines:
            body += "\n"
        path.write_text(body)
        return path

    def profile(self, *blocks: str, mode: str = "count", name: str = "cover.out") -> Path:
        """Write a Go coverage profile holding ``blocks`` lines."""
        path = self.profiles_dir / name
        path.write_text(f"mode: {mode}\n" + "".join(f"{b}\n" for b in blocks))
        return path


@pytest.fixture
def go_tree(tmp_path: Path) -> GoTree:
    coverage_root = tmp_path / "gopath" / "src"
    project_root = coverage_root / PACKAGE
    project_root.mkdir(parents=True)
    profiles_dir = tmp_path / "profiles"
    profiles_dir.mkdir()
    return GoTree(coverage_root=coverage_root, project_root=project_root, profiles_dir=profiles_dir)


@pytest.fixture
def block() -> Callable[..., str]:
    """Format one profile line for a file in the example package."""

    def _block(file: str, start: int, end: int, count: int, *, num_stmt: int = 1) -> str:
        return f"{PACKAGE}/{file}:{start}.2,{end}.16 {num_stmt} {count}"

    return _block
