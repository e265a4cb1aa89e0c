from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Dict, Union

from matplotlib.font_manager import FontProperties
from matplotlib.markers import MarkerStyle
from matplotlib.path import Path
from matplotlib.textpath import TextPath
from matplotlib.transforms import Affine2D

logger = logging.getLogger(__name__)


class MarkerShape(str, Enum):
    """Named marker shapes with a known rendered footprint."""

    CIRCLE = "circle"
    RECT = "rect"
    DIAMOND = "diamond"
    VLINE = "vline"
    HLINE = "hline"
    UTRIANGLE = "utriangle"
    DTRIANGLE = "dtriangle"
    LTRIANGLE = "ltriangle"
    RTRIANGLE = "rtriangle"
    STAR4 = "star4"
    STAR5 = "star5"
    STAR6 = "star6"
    STAR8 = "star8"
    CROSS = "cross"
    XCROSS = "xcross"
    PENTAGON = "pentagon"
    HEXAGON = "hexagon"
    OCTAGON = "octagon"


MarkerDescriptor = Union[MarkerShape, str, Path, Any]

# Every named marker is drawn at 0.75 of its nominal size.
MARKER_SCALE = 0.75

# Radii of the bounding circle in units of the nominal marker size.
CIRCLE_RADIUS = 0.47
SQUARE_RADIUS = math.sqrt(2 * (0.95 * math.sqrt(math.pi) / 2 / 2) ** 2)
TRIANGLE_RADIUS = 0.97 / 2
STAR_RADIUS = 0.6
POLYGON_RADIUS = 0.5

GENERIC_FACTOR = 1.0
ARROW_GLYPH = "\N{BLACK RIGHTWARDS ARROWHEAD}"
ARROW_GLYPH_FACTOR = 0.675
GLYPH_FACTOR = 0.705

SHAPE_RADII: Dict[MarkerShape, float] = {
    MarkerShape.CIRCLE: CIRCLE_RADIUS,
    MarkerShape.RECT: SQUARE_RADIUS,
    MarkerShape.DIAMOND: SQUARE_RADIUS,
    MarkerShape.VLINE: SQUARE_RADIUS,
    MarkerShape.HLINE: SQUARE_RADIUS,
    MarkerShape.UTRIANGLE: TRIANGLE_RADIUS,
    MarkerShape.DTRIANGLE: TRIANGLE_RADIUS,
    MarkerShape.LTRIANGLE: TRIANGLE_RADIUS,
    MarkerShape.RTRIANGLE: TRIANGLE_RADIUS,
    MarkerShape.STAR4: STAR_RADIUS,
    MarkerShape.STAR5: STAR_RADIUS,
    MarkerShape.STAR6: STAR_RADIUS,
    MarkerShape.STAR8: STAR_RADIUS,
    MarkerShape.CROSS: POLYGON_RADIUS,
    MarkerShape.XCROSS: POLYGON_RADIUS,
    MarkerShape.PENTAGON: POLYGON_RADIUS,
    MarkerShape.HEXAGON: POLYGON_RADIUS,
    MarkerShape.OCTAGON: POLYGON_RADIUS,
}

_missing_radii = set(MarkerShape) - set(SHAPE_RADII)
if _missing_radii:
    raise RuntimeError(f"No marker radius defined for: {sorted(s.value for s in _missing_radii)}")

# matplotlib equivalents used when handing markers to scatter()
_MPL_MARKERS: Dict[MarkerShape, Any] = {
    MarkerShape.CIRCLE: "o",
    MarkerShape.RECT: "s",
    MarkerShape.DIAMOND: "D",
    MarkerShape.VLINE: "|",
    MarkerShape.HLINE: "_",
    MarkerShape.UTRIANGLE: "^",
    MarkerShape.DTRIANGLE: "v",
    MarkerShape.LTRIANGLE: "<",
    MarkerShape.RTRIANGLE: ">",
    MarkerShape.STAR4: (4, 1, 0),
    MarkerShape.STAR5: (5, 1, 0),
    MarkerShape.STAR6: (6, 1, 0),
    MarkerShape.STAR8: (8, 1, 0),
    MarkerShape.CROSS: "P",
    MarkerShape.XCROSS: "X",
    MarkerShape.PENTAGON: "p",
    MarkerShape.HEXAGON: "h",
    MarkerShape.OCTAGON: "8",
}

_GLYPH_FONT = FontProperties(family="DejaVu Sans")

_SHAPE_LOOKUP: Dict[str, MarkerShape] = {shape.value: shape for shape in MarkerShape}
_SHAPE_LOOKUP.update(
    {
        "rectangle": MarkerShape.RECT,
        "square": MarkerShape.RECT,
        "triangle": MarkerShape.UTRIANGLE,
        "star": MarkerShape.STAR5,
        "plus": MarkerShape.CROSS,
    }
)


def _shape_key(name: str) -> str:
    # "Star-5", "star 5" and "STAR5" all name the same shape.
    return "".join(ch for ch in name.lower() if ch.isalnum())


def parse_marker(marker: MarkerDescriptor) -> MarkerDescriptor:
    """Resolve shape names to :class:`MarkerShape`; glyphs and other objects pass through.

    A one-character string is always a glyph, so "x" and "+" are drawn as
    text and sized with the glyph factor; use "xcross" or "cross" for the
    polygon shapes.
    """
    if isinstance(marker, MarkerShape):
        return marker
    if isinstance(marker, str) and len(marker) != 1:
        return _SHAPE_LOOKUP.get(_shape_key(marker), marker)
    return marker


def is_glyph(marker: MarkerDescriptor) -> bool:
    return isinstance(marker, str) and not isinstance(marker, MarkerShape) and len(marker) == 1


def marker_half_extent(marker: MarkerDescriptor) -> float:
    """Size factor of ``marker``: its footprint diameter in units of the nominal marker size.

    Generic markers (paths, unknown names) use a 1x1 base size.
    """
    shape = parse_marker(marker)
    if isinstance(shape, MarkerShape):
        return 2 * SHAPE_RADII[shape] * MARKER_SCALE
    if is_glyph(shape):
        return ARROW_GLYPH_FACTOR if shape == ARROW_GLYPH else GLYPH_FACTOR
    if isinstance(shape, str):
        logger.debug(f"Unknown marker name {shape!r}, using generic size factor")
    return GENERIC_FACTOR


def marker_radius(marker: MarkerDescriptor, size: float) -> float:
    """Pixel distance from the center of ``marker`` drawn at ``size`` to its outline."""
    return marker_half_extent(marker) * size / 2


def clearance(marker1: MarkerDescriptor, size1: float, marker2: MarkerDescriptor, size2: float) -> float:
    """Pixel distance between the centers of two touching markers.

    Both markers are treated as circles, so non-circular markers are not
    corrected for the angle at which the edge meets them.
    """
    return marker_radius(marker1, size1) + marker_radius(marker2, size2)


def glyph_path(symbol: str) -> Path:
    """Outline of a single character, centered on the origin and fitted to a unit box."""
    text_path = TextPath((0, 0), symbol, prop=_GLYPH_FONT, size=1.0)
    if len(text_path.vertices) == 0:
        logger.debug(f"Font has no outline for glyph {symbol!r}, drawing a triangle instead")
        return marker_path(MarkerShape.RTRIANGLE)
    bounds = text_path.get_extents()
    span = max(bounds.width, bounds.height) or 1.0
    center_x, center_y = bounds.x0 + bounds.width / 2, bounds.y0 + bounds.height / 2
    return text_path.transformed(Affine2D().translate(-center_x, -center_y).scale(1.0 / span))


def to_mpl_marker(marker: MarkerDescriptor) -> Any:
    """Convert a marker descriptor into a value accepted by ``scatter(marker=...)``."""
    shape = parse_marker(marker)
    if isinstance(shape, MarkerShape):
        return _MPL_MARKERS[shape]
    if is_glyph(shape):
        return glyph_path(shape)
    if isinstance(shape, str):
        return _MPL_MARKERS[MarkerShape.CIRCLE]
    return shape


def marker_path(marker: MarkerDescriptor) -> Path:
    """Marker outline as a :class:`~matplotlib.path.Path`, e.g. for rotating arrowheads."""
    mpl_marker = to_mpl_marker(marker)
    if isinstance(mpl_marker, Path):
        return mpl_marker
    marker_style = MarkerStyle(mpl_marker)
    return marker_style.get_path().transformed(marker_style.get_transform())
