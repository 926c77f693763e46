"""Prune map files that belong to no known zone.

Community map packs ship files for every zone and expansion. Keeping only
the files referenced by the zone lookup keeps the map directory small and
avoids loading stale maps for renamed zones.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from nox_maps.core import constants
from nox_maps.core.logging import get_logger
from nox_maps.maps.lookup import ZoneLookup


logger = get_logger(__name__)


@dataclass
class PruneReport:
    """Outcome of a prune run.

    Attributes:
        kept: Map files that belong to a known zone.
        removed: Orphan files deleted (or that would be, for a dry run).
        failed: Orphan files that could not be deleted, with the error.
        dry_run: Whether files were actually deleted.
    """

    kept: list[Path] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)
    dry_run: bool = True


def is_known_map_file(filename: str, codes: Iterable[str]) -> bool:
    """Check whether a map filename belongs to one of the zone codes.

    ``oot.txt`` belongs to ``oot``; so do layers such as ``oot_1.txt``.
    Codes that themselves contain underscores are matched by prefix.
    """
    base = filename.lower()
    if base.endswith(constants.MAP_FILE_SUFFIX):
        base = base[: -len(constants.MAP_FILE_SUFFIX)]
    known = {code.lower() for code in codes}
    if base in known:
        return True
    if "_" not in base:
        return False
    return any(base.startswith(f"{code}_") for code in known)


def find_orphan_map_files(map_dir: Path | str, lookup: ZoneLookup) -> list[Path]:
    """List ``.txt`` map files in ``map_dir`` that match no known zone code."""
    codes = lookup.codes()
    orphans: list[Path] = []
    for path in sorted(Path(map_dir).iterdir()):
        if not path.is_file() or path.name in constants.LOOKUP_FILE_NAMES:
            continue
        if path.suffix.lower() != constants.MAP_FILE_SUFFIX:
            continue
        if not is_known_map_file(path.name, codes):
            orphans.append(path)
    return orphans


def prune_map_directory(
    map_dir: Path | str,
    lookup: ZoneLookup,
    *,
    dry_run: bool = True,
) -> PruneReport:
    """Delete map files that belong to no zone in ``lookup``.

    Args:
        map_dir: Directory containing the map files.
        lookup: Zone lookup whose codes define the files to keep.
        dry_run: Only report what would be deleted.

    Returns:
        A PruneReport. Deletion failures are recorded, not raised.
    """
    report = PruneReport(dry_run=dry_run)
    orphans = set(find_orphan_map_files(map_dir, lookup))

    for path in sorted(Path(map_dir).iterdir()):
        if not path.is_file() or path.suffix.lower() != constants.MAP_FILE_SUFFIX:
            continue
        if path.name in constants.LOOKUP_FILE_NAMES:
            continue
        if path not in orphans:
            report.kept.append(path)
            continue
        if dry_run:
            report.removed.append(path)
            continue
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not delete map file", path=path.name, error=str(exc))
            report.failed[path] = str(exc)
        else:
            report.removed.append(path)

    logger.info(
        "Pruned map directory",
        map_dir=str(map_dir),
        kept=len(report.kept),
        removed=len(report.removed),
        failed=len(report.failed),
        dry_run=dry_run,
    )
    return report


__all__ = [
    "PruneReport",
    "find_orphan_map_files",
    "is_known_map_file",
    "prune_map_directory",
]
