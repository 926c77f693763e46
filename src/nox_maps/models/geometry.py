"""Zone map geometry models.

Map files describe a zone as flat line segments and point labels. Map
coordinates are already in the renderer's axis convention: the first
horizontal source axis is the map X axis and the second is the map Y axis,
with no negation (only live player coordinates are negated, see
``nox_maps.engine.state_engine``).

Models:
    MapColor: An opaque RGB colour.
    MapLine: A 3-D line segment.
    MapLabel: A 3-D point label with text.
    MapBounds: Axis-aligned 2-D bounding box.
    ZoneMap: The combined geometry of all layers of one zone.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, computed_field


ColorChannel = Annotated[int, Field(ge=0, le=255, description="Colour channel (0-255)")]


class MapColor(BaseModel):
    """An opaque RGB colour taken from a map file."""

    model_config = ConfigDict(frozen=True)

    r: ColorChannel = 0
    g: ColorChannel = 0
    b: ColorChannel = 0

    @classmethod
    def from_tuple(cls, rgb: tuple[int, int, int]) -> MapColor:
        """Build a colour from an ``(r, g, b)`` tuple."""
        r, g, b = rgb
        return cls(r=r, g=g, b=b)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


class MapLine(BaseModel):
    """A line segment between two 3-D points.

    Attributes:
        x1, y1, z1: First endpoint (map X, map Y, elevation).
        x2, y2, z2: Second endpoint.
        color: Stroke colour.
    """

    model_config = ConfigDict(frozen=True)

    x1: float
    y1: float
    z1: float = 0.0
    x2: float
    y2: float
    z2: float = 0.0
    color: MapColor

    @property
    def length(self) -> float:
        """Planar length of the segment."""
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


class MapLabel(BaseModel):
    """A text label anchored at a 3-D point.

    Attributes:
        x, y, z: Anchor position (map X, map Y, elevation).
        color: Text colour.
        size: Font size hint from the map file (typically 1-3).
        text: Label text with underscores already turned into spaces.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float = 0.0
    color: MapColor
    size: int = 0
    text: str = ""


class MapBounds(BaseModel):
    """Axis-aligned 2-D bounding box of a zone's geometry.

    An empty box uses an inverted infinite range so that the first real
    point always replaces it.
    """

    model_config = ConfigDict(frozen=True)

    min_x: float = math.inf
    max_x: float = -math.inf
    min_y: float = math.inf
    max_y: float = -math.inf

    @computed_field(description="True when no point has been added")
    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return 0.0 if self.is_empty else self.max_x - self.min_x

    @property
    def height(self) -> float:
        return 0.0 if self.is_empty else self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        """Centre of the box, or the origin when empty."""
        if self.is_empty:
            return (0.0, 0.0)
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


class ZoneMap(BaseModel):
    """Immutable geometry for one zone, combined across all map layers.

    A ZoneMap is produced whole by ``nox_maps.maps.loader.load_zone`` and
    replaced whole on the next zone change; it is never updated in place.

    Attributes:
        name: Zone file code the map was loaded for.
        lines: Line segments in file and layer order.
        labels: Point labels in file and layer order.
        bounds: Bounding box of all line endpoints.
        sources: Map files that contributed geometry.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    lines: tuple[MapLine, ...] = ()
    labels: tuple[MapLabel, ...] = ()
    bounds: MapBounds = Field(default_factory=MapBounds)
    sources: tuple[Path, ...] = ()

    @classmethod
    def empty(cls, name: str) -> ZoneMap:
        """A map carrying only the zone name, used when no geometry loads."""
        return cls(name=name)

    @property
    def item_count(self) -> int:
        return len(self.lines) + len(self.labels)

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0


__all__ = [
    "MapColor",
    "MapLine",
    "MapLabel",
    "MapBounds",
    "ZoneMap",
]
