"""Tests for the update pipeline."""

from pathlib import Path

from action_pin.core.pipeline import ResolveMode, run_pipeline
from action_pin.core.resolver import VersionResolver

OLD = "a" * 40
NEW = "c" * 40
TAG_SHA = "d" * 40


class TestAdvanceMode:
    """Tests for hash advancement."""

    def test_advances_hash_pins(self, fake_api, sample_workflow: Path) -> None:
        """Test hash pins move to the latest release, tags are untouched."""
        fake_api.add_latest("actions/checkout", "v4.2.0")
        fake_api.add_tag("actions/checkout", "v4.2.0", NEW)

        result = run_pipeline(
            [sample_workflow],
            mode=ResolveMode.ADVANCE,
            resolver=VersionResolver(fake_api),
        )

        text = sample_workflow.read_text()
        assert f"uses: actions/checkout@{NEW} # v4.2.0\n" in text
        assert "v4.1.0" not in text
        assert "uses: actions/setup-python@v5\n" in text
        assert result.resolved == {"actions/checkout": f"{NEW} # v4.2.0"}
        assert result.report.action_counts == {"actions/checkout": 1}
        assert result.report.files_written == [str(sample_workflow)]
        # Tag-pinned actions are never queried in advance mode
        assert not any("setup-python" in call for call in fake_api.calls)

    def test_second_run_is_noop(self, fake_api, sample_workflow: Path) -> None:
        """Test running twice without new releases changes nothing."""
        fake_api.add_latest("actions/checkout", "v4.2.0")
        fake_api.add_tag("actions/checkout", "v4.2.0", NEW)

        run_pipeline([sample_workflow], mode=ResolveMode.ADVANCE, resolver=VersionResolver(fake_api))
        after_first = sample_workflow.read_bytes()
        second = run_pipeline(
            [sample_workflow], mode=ResolveMode.ADVANCE, resolver=VersionResolver(fake_api)
        )

        assert sample_workflow.read_bytes() == after_first
        assert second.report.changed_files == []
        assert second.report.action_counts == {}

    def test_failed_action_skipped(self, fake_api, tmp_path: Path) -> None:
        """Test an unresolvable action is skipped and the run continues."""
        path = tmp_path / "ci.yml"
        path.write_text(f"uses: a/b@{OLD}\nuses: c/d@{OLD}\n")
        fake_api.add_latest("c/d", "v1.0.0").add_tag("c/d", "v1.0.0", NEW)

        result = run_pipeline([path], mode=ResolveMode.ADVANCE, resolver=VersionResolver(fake_api))

        assert path.read_text() == f"uses: a/b@{OLD}\nuses: c/d@{NEW} # v1.0.0\n"
        assert [d.code for d in result.diagnostics] == ["PIN-RES-001"]
        assert result.warning_count == 1

    def test_one_query_per_action(self, fake_api, tmp_path: Path) -> None:
        """Test repeated references across files query the API once."""
        fake_api.add_latest("a/b", "v1.0.0").add_tag("a/b", "v1.0.0", NEW)
        files = []
        for name in ("one.yml", "two.yml"):
            path = tmp_path / name
            path.write_text(f"uses: a/b@{OLD}\nuses: a/b@{'b' * 40}\n")
            files.append(path)

        result = run_pipeline(files, mode=ResolveMode.ADVANCE, resolver=VersionResolver(fake_api))

        assert fake_api.calls.count("repos/a/b/releases/latest") == 1
        assert result.report.action_counts == {"a/b": 4}
        assert len(result.report.changed_files) == 2


class TestMigrateMode:
    """Tests for tag to hash migration."""

    def test_migrates_tag_pins(self, fake_api, sample_workflow: Path) -> None:
        """Test tag pins become hash pins annotated with the original tag."""
        fake_api.add_releases("actions/setup-python", ["v5.0.0", "v5.1.1", "v5.1.0"])
        fake_api.add_tag("actions/setup-python", "v5.1.1", TAG_SHA)

        result = run_pipeline(
            [sample_workflow],
            mode=ResolveMode.MIGRATE,
            resolver=VersionResolver(fake_api),
        )

        text = sample_workflow.read_text()
        assert f"uses: actions/setup-python@{TAG_SHA} # v5\n" in text
        assert f"uses: actions/checkout@{OLD} # v4.1.0\n" in text
        assert result.resolved == {"actions/setup-python@v5": f"{TAG_SHA} # v5"}
        assert result.candidates == {"actions/setup-python": {"v5"}}

    def test_migrated_file_is_stable(self, fake_api, tmp_path: Path) -> None:
        """Test migrated references are not picked up by a second migration."""
        path = tmp_path / "ci.yml"
        path.write_text("uses: a/b@v1.0.0\n")
        fake_api.add_tag("a/b", "v1.0.0", TAG_SHA)

        run_pipeline([path], mode=ResolveMode.MIGRATE, resolver=VersionResolver(fake_api))
        second = run_pipeline([path], mode=ResolveMode.MIGRATE, resolver=VersionResolver(fake_api))

        assert path.read_text() == f"uses: a/b@{TAG_SHA} # v1.0.0\n"
        assert second.scan.tags == {}
        assert second.report.outcomes == []

    def test_fallback_tag_not_rewritten_twice(self, fake_api, tmp_path: Path) -> None:
        """Test a bare-tag fallback pin is not rewritten again by another tag's rule."""
        path = tmp_path / "ci.yml"
        path.write_text("- uses: a/b@v1\n- uses: a/b@v1.2.10\n")
        fake_api.add_releases("a/b", ["v1.2.10"])
        fake_api.add_commit("a/b", "v1.2.10", TAG_SHA)

        result = run_pipeline([path], mode=ResolveMode.MIGRATE, resolver=VersionResolver(fake_api))

        assert path.read_text() == f"- uses: a/b@v1.2.10\n- uses: a/b@{TAG_SHA} # v1.2.10\n"
        assert result.resolved == {"a/b@v1": "v1.2.10", "a/b@v1.2.10": f"{TAG_SHA} # v1.2.10"}
        assert result.report.action_counts == {"a/b": 2}
        assert [d.code for d in result.diagnostics] == ["PIN-RES-003"]


class TestTargetFilter:
    """Tests for target-action filtering."""

    def test_only_targets_resolved_and_rewritten(self, fake_api, tmp_path: Path) -> None:
        """Test non-target actions are neither queried nor modified."""
        path = tmp_path / "ci.yml"
        original = f"uses: a/b@{OLD}\nuses: c/d@{OLD}\nuses: c/d@v1.0.0\n"
        path.write_text(original)
        fake_api.add_latest("a/b", "v2.0.0").add_tag("a/b", "v2.0.0", NEW)
        fake_api.add_latest("c/d", "v2.0.0").add_tag("c/d", "v2.0.0", NEW)

        result = run_pipeline(
            [path],
            mode=ResolveMode.ADVANCE,
            resolver=VersionResolver(fake_api),
            targets={"a/b"},
        )

        assert all("c/d" not in call for call in fake_api.calls)
        assert path.read_text() == f"uses: a/b@{NEW} # v2.0.0\nuses: c/d@{OLD}\nuses: c/d@v1.0.0\n"
        assert set(result.scan.actions) == {"a/b"}


class TestDryRun:
    """Tests for dry-run."""

    def test_dry_run_matches_real_run(self, fake_api, tmp_path: Path) -> None:
        """Test dry-run reports the same changes and writes nothing."""
        fake_api.add_latest("a/b", "v2.0.0").add_tag("a/b", "v2.0.0", NEW)
        content = f"uses: a/b@{OLD} # v1\n".encode()
        dry = tmp_path / "dry" / "ci.yml"
        real = tmp_path / "real" / "ci.yml"
        for path in (dry, real):
            path.parent.mkdir()
            path.write_bytes(content)

        dry_result = run_pipeline(
            [dry], mode=ResolveMode.ADVANCE, resolver=VersionResolver(fake_api), dry_run=True
        )
        real_result = run_pipeline(
            [real], mode=ResolveMode.ADVANCE, resolver=VersionResolver(fake_api)
        )

        assert dry.read_bytes() == content
        assert dry_result.dry_run
        assert dry_result.report.files_written == []
        assert len(dry_result.report.changed_files) == 1
        assert dry_result.report.action_counts == real_result.report.action_counts
        assert dry_result.resolved == real_result.resolved


class TestScanErrors:
    """Tests for scan error handling in the pipeline."""

    def test_bad_file_does_not_abort(self, fake_api, tmp_path: Path) -> None:
        """Test a missing file is reported and others are processed."""
        good = tmp_path / "good.yml"
        good.write_text(f"uses: a/b@{OLD}\n")
        fake_api.add_latest("a/b", "v2.0.0").add_tag("a/b", "v2.0.0", NEW)

        result = run_pipeline(
            [tmp_path / "gone.yml", good],
            mode=ResolveMode.ADVANCE,
            resolver=VersionResolver(fake_api),
        )

        assert [d.code for d in result.diagnostics] == ["PIN-SCAN-001"]
        assert result.report.files_written == [str(good)]
