"""Removal of pending insta snapshots made stale by inline snapshots."""

import logging
from pathlib import Path
from typing import Iterable, Optional

import yaml

from rust_codestyle.domain.protocols import SnapshotCleanupProtocol

logger = logging.getLogger(__name__)

# Pending derivatives only; accepted `.snap` files are left for `cargo insta`.
PENDING_SUFFIXES = (".snap.new", ".pending-snap")


def _header_source(text: str) -> Optional[str]:
    """
    The ``source:`` a snapshot file was recorded from.

    ``.snap`` files carry a YAML front matter block between ``---`` lines;
    ``.pending-snap`` files are JSON lines (valid YAML) with the source under
    ``new.metadata``.
    """
    lines = text.splitlines()
    if lines and lines[0].strip() == "---":
        header = []
        for line in lines[1:]:
            if line.strip() == "---":
                break
            header.append(line)
        document = _load("\n".join(header))
        source = document.get("source") if isinstance(document, dict) else None
    else:
        document = _load(lines[0]) if lines else None
        source = None
        if isinstance(document, dict):
            for key in ("new", "old"):
                entry = document.get(key)
                metadata = entry.get("metadata") if isinstance(entry, dict) else None
                if isinstance(metadata, dict) and metadata.get("source"):
                    source = metadata["source"]
                    break
    return str(source) if source else None


def _load(text: str) -> object:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return None


def _matches(source_path: Path, recorded: str) -> bool:
    recorded = recorded.replace("\\", "/")
    while recorded.startswith("./"):
        recorded = recorded[2:]
    posix = source_path.as_posix()
    return posix == recorded or posix.endswith("/" + recorded)


class SnapshotGateway(SnapshotCleanupProtocol):
    """Deletes pending snapshots whose assertions were rewritten inline."""

    def _candidates(self, source_path: Path) -> list[tuple[Path, bool]]:
        """Pending snapshots near a source, paired with whether their header is checked."""
        found: list[tuple[Path, bool]] = []
        snapshot_dir = source_path.parent / "snapshots"
        if snapshot_dir.is_dir():
            found.extend(
                (p, True) for p in sorted(snapshot_dir.iterdir())
                if p.is_file() and p.name.endswith(PENDING_SUFFIXES)
            )
        inline_pending = source_path.parent / f".{source_path.name}.pending-snap"
        if inline_pending.is_file():
            found.append((inline_pending, False))
        return found

    def remove_stale_snapshots(self, source_paths: Iterable[str]) -> list[str]:
        """Delete stale pending snapshots for the given sources; return what was removed."""
        removed = []
        for raw in source_paths:
            source_path = Path(raw).resolve()
            for candidate, verify in self._candidates(source_path):
                if not verify:
                    stale = True
                else:
                    try:
                        recorded = _header_source(candidate.read_text(encoding="utf-8"))
                    except (OSError, UnicodeDecodeError) as exc:
                        logger.warning("cannot read snapshot %s: %s", candidate, exc)
                        continue
                    stale = recorded is not None and _matches(source_path, recorded)
                if stale:
                    candidate.unlink()
                    removed.append(str(candidate))
        return removed
