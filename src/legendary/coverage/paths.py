"""Canonical path keys for covered source files.

Profiles name files relative to a coverage root (for GOPATH-style profiles,
``$GOPATH/src``). Reports name them relative to the project root. The
canonical key is the reported name re-expressed relative to the project
root; blocks from any profile that produce the same key are merged.

Resolution is purely lexical: nothing here touches the filesystem, so
symlinks are not followed and missing files still get a key.
"""

import os
from pathlib import PurePath

from legendary.core.errors import PathResolutionError


def _split(path: str) -> tuple[str, tuple[str, ...]]:
    pure = PurePath(os.path.normpath(path))
    parts = pure.parts[1:] if pure.anchor else pure.parts
    return pure.anchor, tuple(p for p in parts if p != ".")


def relative_path(base: str, target: str) -> str:
    """Express ``target`` relative to ``base`` without consulting the filesystem.

    The result may climb out of ``base`` with ``..`` components.

    Raises:
        PathResolutionError: If no relative form exists: one path is
            absolute and the other is not, the paths live under different
            anchors (e.g. Windows drives), or ``base`` holds ``..``
            components that ``target`` does not share.
    """
    if os.path.isabs(base) != os.path.isabs(target):
        raise PathResolutionError.not_relative(
            base, target, "one path is absolute and the other is relative"
        )

    base_anchor, base_parts = _split(base)
    target_anchor, target_parts = _split(target)
    if os.path.normcase(base_anchor) != os.path.normcase(target_anchor):
        raise PathResolutionError.not_relative(base, target, "paths have different roots")

    common = 0
    for b, t in zip(base_parts, target_parts, strict=False):
        if os.path.normcase(b) != os.path.normcase(t):
            break
        common += 1

    remaining = base_parts[common:]
    if ".." in remaining:
        raise PathResolutionError.not_relative(base, target, "can't undo '..' in base path")

    parts = [os.pardir] * len(remaining) + list(target_parts[common:])
    return os.path.join(*parts) if parts else os.curdir


def canonicalize(coverage_root: str, project_root: str, reported_file_name: str) -> str:
    """Map a profile's file name to its canonical key.

    The reported name is always placed beneath ``coverage_root``, even when
    it begins with a separator, and the result is expressed relative to
    ``project_root``.

    Example:
        canonicalize("/src", "/src/app", "app/main.go") -> "main.go"

    Raises:
        PathResolutionError: If a root is empty or no relative path exists.
    """
    if not coverage_root:
        raise PathResolutionError.empty_root("coverage root")
    if not project_root:
        raise PathResolutionError.empty_root("project root")

    separators = os.sep + (os.altsep or "")
    absolute = os.path.normpath(os.path.join(coverage_root, reported_file_name.lstrip(separators)))
    return relative_path(project_root, absolute)
