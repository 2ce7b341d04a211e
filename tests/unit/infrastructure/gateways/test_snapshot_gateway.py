"""Unit tests for SnapshotGateway."""

import json
from pathlib import Path

from rust_codestyle.infrastructure.gateways.snapshot_gateway import SnapshotGateway, _header_source


def snap(source: str, expression: str = "value") -> str:
    return (
        "---\n"
        f"source: {source}\n"
        f"expression: {expression}\n"
        "---\n"
        "hello\n"
    )


class TestHeaderSource:
    """Reading the recorded source of a snapshot."""

    def test_yaml_front_matter(self) -> None:
        """``.snap`` files carry the source in their header."""
        assert _header_source(snap("tests/render.rs")) == "tests/render.rs"

    def test_pending_json(self) -> None:
        """``.pending-snap`` lines carry it under new.metadata."""
        line = json.dumps({"run_id": "1", "line": 3,
                           "new": {"module_name": "render", "metadata": {"source": "tests/render.rs"}},
                           "old": None})
        assert _header_source(line + "\n") == "tests/render.rs"

    def test_no_header(self) -> None:
        """Unrecognized files have no source."""
        assert _header_source("just text\n") is None
        assert _header_source("") is None


class TestRemoveStaleSnapshots:
    """Deleting external snapshots recorded from a file."""

    def test_removes_only_pending_snapshots_of_the_file(self, tmp_path: Path) -> None:
        """Accepted snapshots and those of other sources are kept."""
        source = tmp_path / "tests" / "render.rs"
        source.parent.mkdir()
        source.write_text("", encoding="utf-8")
        snapshots = source.parent / "snapshots"
        snapshots.mkdir()
        (snapshots / "render__t.snap").write_text(snap("tests/render.rs"), encoding="utf-8")
        (snapshots / "render__t.snap.new").write_text(snap("tests/render.rs"), encoding="utf-8")
        (snapshots / "other__t.snap").write_text(snap("tests/other.rs"), encoding="utf-8")
        (snapshots / "other__t.snap.new").write_text(snap("tests/other.rs"), encoding="utf-8")
        (snapshots / "notes.txt").write_text("source: tests/render.rs", encoding="utf-8")

        removed = SnapshotGateway().remove_stale_snapshots([str(source)])

        assert [Path(p).name for p in removed] == ["render__t.snap.new"]
        assert sorted(p.name for p in snapshots.iterdir()) == [
            "notes.txt", "other__t.snap", "other__t.snap.new", "render__t.snap"]

    def test_removes_inline_pending_file(self, tmp_path: Path) -> None:
        """``.<file>.pending-snap`` next to the source belongs to it."""
        source = tmp_path / "lib.rs"
        source.write_text("", encoding="utf-8")
        pending = tmp_path / ".lib.rs.pending-snap"
        pending.write_text("{}\n", encoding="utf-8")
        assert SnapshotGateway().remove_stale_snapshots([str(source)]) == [str(pending.resolve())]
        assert not pending.exists()

    def test_no_snapshot_directory(self, tmp_path: Path) -> None:
        """Nothing to remove is fine."""
        source = tmp_path / "lib.rs"
        source.write_text("", encoding="utf-8")
        assert SnapshotGateway().remove_stale_snapshots([str(source)]) == []
