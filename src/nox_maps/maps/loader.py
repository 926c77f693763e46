"""Zone map file parsing.

Map files are plain text with one geometry item per line::

    L 1250.0, -340.5, 3.1, 1250.0, -280.0, 3.1, 0, 0, 255
    P 900.0, 75.0, 2.0, 255, 0, 0, 2, Zone_to_the_Commonlands

``L`` lines are segments (two endpoints, optional RGB). ``P`` lines are
labels (position, RGB, size, text). Map authors are inconsistent, so the
parser is deliberately lenient: the command letter is searched for anywhere
in the line, bad numbers read as zero, and lines without a command are
skipped as comments.

A zone may have a base file ``<code>.txt`` and up to three layer files
``<code>_1.txt`` .. ``<code>_3.txt``; ``load_zone`` merges all of them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from nox_maps.core import constants
from nox_maps.core.exceptions import MapParseError, ZoneNotFoundError
from nox_maps.core.logging import get_logger
from nox_maps.models.geometry import MapBounds, MapColor, MapLabel, MapLine, ZoneMap


logger = get_logger(__name__)

_BOM = "\ufeff"
_LINE_FIELDS = 6
_LABEL_FIELDS = 7


# =============================================================================
# Field parsing
# =============================================================================


def parse_float(value: str) -> float:
    """Parse a coordinate, reading anything unparseable as zero."""
    try:
        number = float(value.strip())
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_color(red: str, green: str, blue: str) -> MapColor:
    """Parse an RGB triple.

    Channels are clamped to 0-255. An all-zero colour is replaced with a
    mid grey so that zeroed-out colour fields do not draw black lines.
    """
    rgb = tuple(max(0, min(255, parse_int(channel))) for channel in (red, green, blue))
    if rgb == (0, 0, 0):
        return MapColor.from_tuple(constants.ZERO_COLOR_SUBSTITUTE)
    return MapColor(r=rgb[0], g=rgb[1], b=rgb[2])


def _find_command(line: str) -> int:
    for index, char in enumerate(line):
        if char in "LlPp":
            return index
    return -1


def parse_map_line(text: str) -> MapLine | MapLabel | None:
    """Parse one physical line of a map file.

    Args:
        text: The raw line.

    Returns:
        A MapLine or MapLabel, or None for blank lines, comments, and lines
        with too few fields.
    """
    line = text.replace(_BOM, "").strip()
    if not line:
        return None

    index = _find_command(line)
    if index == -1:
        return None

    command = line[index].upper()
    fields = line[index + 1 :].lstrip(" ,").split(",")

    if command == "L":
        if len(fields) < _LINE_FIELDS:
            return None
        if len(fields) >= _LINE_FIELDS + 3:
            color = parse_color(fields[6], fields[7], fields[8])
        else:
            color = MapColor.from_tuple(constants.DEFAULT_LINE_COLOR)
        return MapLine(
            x1=parse_float(fields[0]),
            y1=parse_float(fields[1]),
            z1=parse_float(fields[2]),
            x2=parse_float(fields[3]),
            y2=parse_float(fields[4]),
            z2=parse_float(fields[5]),
            color=color,
        )

    if len(fields) < _LABEL_FIELDS:
        return None
    text_fields = fields[_LABEL_FIELDS:]
    label_text = ",".join(text_fields).strip().replace("_", " ") if text_fields else ""
    return MapLabel(
        x=parse_float(fields[0]),
        y=parse_float(fields[1]),
        z=parse_float(fields[2]),
        color=parse_color(fields[3], fields[4], fields[5]),
        size=parse_int(fields[6]),
        text=label_text,
    )


# =============================================================================
# File and zone loading
# =============================================================================


@dataclass
class BoundsTracker:
    """Running bounding box, seeded with an inverted range."""

    min_x: float = math.inf
    max_x: float = -math.inf
    min_y: float = math.inf
    max_y: float = -math.inf

    def update(self, x: float, y: float) -> None:
        self.min_x = min(self.min_x, x)
        self.max_x = max(self.max_x, x)
        self.min_y = min(self.min_y, y)
        self.max_y = max(self.max_y, y)

    def add_line(self, line: MapLine) -> None:
        self.update(line.x1, line.y1)
        self.update(line.x2, line.y2)

    def to_bounds(self) -> MapBounds:
        return MapBounds(
            min_x=self.min_x,
            max_x=self.max_x,
            min_y=self.min_y,
            max_y=self.max_y,
        )


@dataclass
class ParsedMapFile:
    """Geometry read from a single map file."""

    path: Path
    lines: list[MapLine] = field(default_factory=list)
    labels: list[MapLabel] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.lines) + len(self.labels)


def parse_map_file(path: Path | str) -> ParsedMapFile:
    """Parse every line of a map file.

    Args:
        path: Map file to read.

    Returns:
        The segments and labels found, in file order.

    Raises:
        MapParseError: If the file cannot be read.
    """
    path = Path(path)
    parsed = ParsedMapFile(path=path)
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            for raw in handle:
                item = parse_map_line(raw)
                if isinstance(item, MapLine):
                    parsed.lines.append(item)
                elif isinstance(item, MapLabel):
                    parsed.labels.append(item)
    except OSError as exc:
        raise MapParseError(
            f"Could not read map file: {exc}",
            source_file=str(path),
        ) from exc
    return parsed


def index_map_directory(map_dir: Path | str) -> dict[str, Path]:
    """Map lower-cased filenames to paths for case-insensitive lookup."""
    directory = Path(map_dir)
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return {}
    return {path.name.lower(): path for path in entries if path.is_file()}


def layer_file_names(zone_code: str) -> list[str]:
    """Lower-cased filenames of a zone's base map and its layers, in load order."""
    return [
        f"{zone_code}{suffix}{constants.MAP_FILE_SUFFIX}".lower()
        for suffix in constants.MAP_LAYER_SUFFIXES
    ]


def load_zone(map_dir: Path | str, zone_code: str) -> ZoneMap:
    """Load and merge all map files of a zone.

    Args:
        map_dir: Directory containing the map files.
        zone_code: Short file code of the zone (e.g. ``gfaydark``).

    Returns:
        The combined ZoneMap.

    Raises:
        ZoneNotFoundError: If no map file exists for the zone, or none of
            them contains any geometry.

    Example:
        >>> zone = load_zone(Path("assets/maps"), "qeynos")
        >>> zone.bounds.width > 0
        True
    """
    index = index_map_directory(map_dir)

    lines: list[MapLine] = []
    labels: list[MapLabel] = []
    sources: list[Path] = []
    bounds = BoundsTracker()

    for target in layer_file_names(zone_code):
        path = index.get(target)
        if path is None:
            continue
        try:
            parsed = parse_map_file(path)
        except MapParseError as exc:
            logger.warning("Skipping unreadable map file", **exc.details)
            continue

        if parsed.item_count == 0:
            logger.warning("Map file has no valid items", path=path.name)
            continue

        logger.debug(
            "Parsed map file",
            path=path.name,
            lines=len(parsed.lines),
            labels=len(parsed.labels),
        )
        for line in parsed.lines:
            bounds.add_line(line)
        lines.extend(parsed.lines)
        labels.extend(parsed.labels)
        sources.append(path)

    if not sources:
        sample = [path.name for path in index.values()][: constants.MAP_SAMPLE_FILE_COUNT]
        raise ZoneNotFoundError(
            f"No map files found for zone: {zone_code}",
            zone_code=zone_code,
            map_dir=str(map_dir),
            sample_files=sample,
        )

    return ZoneMap(
        name=zone_code,
        lines=tuple(lines),
        labels=tuple(labels),
        bounds=bounds.to_bounds(),
        sources=tuple(sources),
    )


__all__ = [
    "BoundsTracker",
    "ParsedMapFile",
    "index_map_directory",
    "layer_file_names",
    "load_zone",
    "parse_color",
    "parse_float",
    "parse_int",
    "parse_map_file",
    "parse_map_line",
]
