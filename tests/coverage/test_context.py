"""End-to-end tests for collect_coverage_context."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest
from structlog.testing import capture_logs

from legendary.core.errors import ConfigError, ProfileParseError
from legendary.coverage.context import collect_coverage_context

FIXED = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


class TestCollectCoverageContext:
    """Profiles in, report context out."""

    def test_merges_and_classifies(self, go_tree: Any, block: Callable[..., str]) -> None:
        go_tree.source("main.go", 6)
        go_tree.source("util.go", 3)
        p1 = go_tree.profile(block("main.go", 1, 2, 1), block("main.go", 4, 4, 0), name="1.out")
        p2 = go_tree.profile(block("main.go", 4, 4, 2), block("util.go", 1, 3, 0), name="2.out")

        run = collect_coverage_context(
            str(go_tree.coverage_root), str(go_tree.project_root), [p1, p2], clock=lambda: FIXED
        )

        ctx = run.context
        assert ctx.generated_at == FIXED
        assert sorted(ctx.results) == ["main.go", "util.go"]
        main = ctx.results["main.go"]
        assert main.hits == (0, 1, 3)
        assert main.misses == ()
        assert main.ignored == (2, 4, 5)
        assert ctx.results["util.go"].misses == (0, 1, 2)
        assert run.profile_errors == []
        assert run.source_errors == []

    def test_line_zero_blocks_merge_into_first_line(
        self, go_tree: Any, block: Callable[..., str]
    ) -> None:
        go_tree.source("b.go", 3)
        p1 = go_tree.profile(block("b.go", 0, 0, 2), name="1.out")
        p2 = go_tree.profile(block("b.go", 0, 0, 3), name="2.out")

        run = collect_coverage_context(
            str(go_tree.coverage_root), str(go_tree.project_root), [p1, p2]
        )

        result = run.context.results["b.go"]
        assert result.hits == (0,)
        assert result.misses == ()
        assert result.ignored == (1, 2)

    def test_deleted_source_dropped_others_reported(
        self, go_tree: Any, block: Callable[..., str]
    ) -> None:
        go_tree.source("kept.go", 2)
        gone = go_tree.source("gone.go", 2)
        profile = go_tree.profile(block("kept.go", 1, 1, 1), block("gone.go", 1, 2, 1))
        gone.unlink()

        with capture_logs() as logs:
            run = collect_coverage_context(
                str(go_tree.coverage_root), str(go_tree.project_root), [profile]
            )

        assert list(run.context.results) == ["kept.go"]
        assert len(run.source_errors) == 1
        assert run.source_errors[0].path.endswith("gone.go")
        dropped = [e for e in logs if e["event"] == "source_dropped"]
        assert len(dropped) == 1
        assert dropped[0]["log_level"] == "warning"
        assert dropped[0]["file"] == "gone.go"
        assert dropped[0]["error"] == "SOURCE_UNREADABLE"

    def test_bad_profile_does_not_abort(self, go_tree: Any, block: Callable[..., str]) -> None:
        go_tree.source("a.go", 1)
        bad = go_tree.profiles_dir / "bad.out"
        bad.write_text("mode: set\nthis is not a block\n")
        good = go_tree.profile(block("a.go", 1, 1, 1), name="good.out")

        with capture_logs() as logs:
            run = collect_coverage_context(
                str(go_tree.coverage_root), str(go_tree.project_root), [bad, good]
            )

        assert list(run.context.results) == ["a.go"]
        assert len(run.profile_errors) == 1
        assert isinstance(run.profile_errors[0], ProfileParseError)
        skipped = [e for e in logs if e["event"] == "profile_skipped"]
        assert [e["profile"] for e in skipped] == [str(bad)]
        assert skipped[0]["error"] == "PROFILE_MALFORMED"

    def test_profile_order_does_not_matter(self, go_tree: Any, block: Callable[..., str]) -> None:
        go_tree.source("a.go", 5)
        p1 = go_tree.profile(block("a.go", 1, 3, 0), name="1.out")
        p2 = go_tree.profile(block("a.go", 2, 5, 1), name="2.out")
        roots = (str(go_tree.coverage_root), str(go_tree.project_root))

        forward = collect_coverage_context(*roots, [p1, p2], clock=lambda: FIXED)
        backward = collect_coverage_context(*roots, [p2, p1], clock=lambda: FIXED)

        assert forward.context == backward.context

    def test_workers_give_same_result(self, go_tree: Any, block: Callable[..., str]) -> None:
        profiles = []
        for i in range(6):
            go_tree.source(f"f{i}.go", 10)
            profiles.append(go_tree.profile(block(f"f{i}.go", 1, i + 1, i % 2), name=f"{i}.out"))
        roots = (str(go_tree.coverage_root), str(go_tree.project_root))

        serial = collect_coverage_context(*roots, profiles, clock=lambda: FIXED)
        threaded = collect_coverage_context(*roots, profiles, max_workers=3, clock=lambda: FIXED)

        assert serial.context == threaded.context

    @pytest.mark.parametrize(("coverage_root", "project_root"), [("", "/p"), ("/c", "")])
    def test_empty_roots_rejected(self, coverage_root: str, project_root: str) -> None:
        with pytest.raises(ConfigError):
            collect_coverage_context(coverage_root, project_root, [])
