from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
from matplotlib.bezier import BezierSegment
from matplotlib.path import Path
from matplotlib.transforms import Transform

logger = logging.getLogger(__name__)

PointLike = Union[Sequence[float], np.ndarray]
ToPixels = Union[Callable[[np.ndarray], PointLike], Transform]


# ------------------------------------------------------------------ #
# Construction
# ------------------------------------------------------------------ #

def straight_path(p0: PointLike, p1: PointLike) -> Path:
    return Path([tuple(p0), tuple(p1)], [Path.MOVETO, Path.LINETO])


def curved_path(p0: PointLike, c1: PointLike, c2: PointLike, p1: PointLike) -> Path:
    """Single cubic bezier from ``p0`` to ``p1`` with control points ``c1`` and ``c2``."""
    return Path(
        [tuple(p0), tuple(c1), tuple(c2), tuple(p1)],
        [Path.MOVETO, Path.CURVE4, Path.CURVE4, Path.CURVE4],
    )


def polyline_path(points: Sequence[PointLike]) -> Path:
    if len(points) < 2:
        raise ValueError("A polyline needs at least two points.")
    codes = [Path.MOVETO] + [Path.LINETO] * (len(points) - 1)
    return Path([tuple(p) for p in points], codes)


# ------------------------------------------------------------------ #
# Evaluation
# ------------------------------------------------------------------ #

def segments(path: Path) -> List[Tuple[int, np.ndarray]]:
    """Split ``path`` into ``(code, control_points)`` pairs, one per drawable segment.

    ``control_points`` includes the segment's start point, so a line has two
    rows, a quadratic curve three and a cubic curve four. ``CLOSEPOLY`` becomes
    a line back to the last ``MOVETO``.
    """
    result: List[Tuple[int, np.ndarray]] = []
    current: Optional[np.ndarray] = None
    subpath_start: Optional[np.ndarray] = None
    for vertices, code in path.iter_segments(simplify=False, curves=True):
        points = np.asarray(vertices, dtype=float).reshape(-1, 2)
        if code == Path.MOVETO:
            current = points[-1]
            subpath_start = current
            continue
        if current is None:
            raise ValueError("Path must start with a MOVETO.")
        if code == Path.CLOSEPOLY:
            points = subpath_start.reshape(1, 2)
            code = Path.LINETO
        result.append((code, np.vstack([current, points])))
        current = points[-1]
    return result


def _locate(path: Path, t: float) -> Tuple[int, np.ndarray, float]:
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"Path parameter t must be within [0, 1], got {t}.")
    parts = segments(path)
    if not parts:
        raise ValueError("Path has no drawable segments.")
    count = len(parts)
    index = min(int(t * count), count - 1)
    local_t = t * count - index
    code, control = parts[index]
    return code, control, local_t


def _bezier_point(control: np.ndarray, t: float) -> np.ndarray:
    return np.asarray(BezierSegment(control).point_at_t(t), dtype=float)


def _bezier_derivative(control: np.ndarray, t: float) -> np.ndarray:
    # The derivative of a degree-n curve is a degree-(n-1) curve over scaled differences.
    hodograph = (len(control) - 1) * np.diff(control, axis=0)
    if len(hodograph) == 1:
        return hodograph[0]
    return _bezier_point(hodograph, t)


def interpolate(path: Path, t: float) -> np.ndarray:
    """Point on ``path`` at parameter ``t``; each segment spans an equal share of ``[0, 1]``."""
    _, control, local_t = _locate(path, t)
    return _bezier_point(control, local_t)


def tangent(path: Path, t: float) -> np.ndarray:
    """Unnormalized tangent of ``path`` at parameter ``t``.

    At the segment ends a vanishing derivative (control point on top of the
    end point) falls back to the direction of the next distinct control point.
    """
    _, control, local_t = _locate(path, t)
    direction = _bezier_derivative(control, local_t)
    if np.any(direction):
        return direction
    if local_t >= 1.0:
        for point in control[-2::-1]:
            if np.any(control[-1] - point):
                return control[-1] - point
    elif local_t <= 0.0:
        for point in control[1:]:
            if np.any(point - control[0]):
                return point - control[0]
    return direction


# ------------------------------------------------------------------ #
# Endpoint adjustment
# ------------------------------------------------------------------ #

def _as_projection(to_px: ToPixels) -> Callable[[PointLike], np.ndarray]:
    if hasattr(to_px, "transform"):
        return lambda point: np.asarray(to_px.transform(np.asarray(point, dtype=float)), dtype=float)
    return lambda point: np.asarray(to_px(np.asarray(point, dtype=float)), dtype=float)


def _pixel_step(path: Path, t: float, pixel_distance: float, to_px: ToPixels) -> Optional[np.ndarray]:
    # Data-space displacement that covers pixel_distance along the tangent at t.
    project = _as_projection(to_px)
    origin = project((0.0, 0.0))
    direction = project(tangent(path, t)) - origin
    length = math.hypot(direction[0], direction[1])
    if length == 0:
        logger.debug(f"Path tangent at t={t} has zero length in pixel space, endpoint kept")
        return None
    scale = 1.0 / (project((1.0, 1.0)) - origin)
    return pixel_distance * (direction / length) * scale


def slide_toward(
    path: Path,
    reference_point: PointLike,
    pixel_distance: float,
    to_px: ToPixels,
    *,
    at: float = 1.0,
) -> np.ndarray:
    """Move ``reference_point`` back along the path tangent by ``pixel_distance`` pixels.

    The tangent is evaluated at ``at`` (``1`` is the destination end). It is
    mapped to pixel space by ``to_px`` with the translation removed, and the
    requested distance is mapped back with the inverse per-axis scale, so the
    visible gap is ``pixel_distance`` whatever the aspect ratio or zoom.
    ``to_px`` is a callable or a matplotlib transform such as ``ax.transData``.
    """
    reference = np.asarray(reference_point, dtype=float)
    if pixel_distance == 0:
        return reference.copy()
    step = _pixel_step(path, at, pixel_distance, to_px)
    if step is None:
        return reference.copy()
    return reference - step


def slide_from_start(
    path: Path,
    reference_point: PointLike,
    pixel_distance: float,
    to_px: ToPixels,
) -> np.ndarray:
    """Move ``reference_point`` forward along the start tangent by ``pixel_distance`` pixels."""
    reference = np.asarray(reference_point, dtype=float)
    if pixel_distance == 0:
        return reference.copy()
    step = _pixel_step(path, 0.0, pixel_distance, to_px)
    if step is None:
        return reference.copy()
    return reference + step


def _last_vertex_index(path: Path) -> int:
    if path.codes is None:
        return len(path.vertices) - 1
    for index in range(len(path.codes) - 1, -1, -1):
        if path.codes[index] not in (Path.CLOSEPOLY, Path.STOP):
            return index
    raise ValueError("Path has no vertices.")


def trim_path(
    path: Path,
    start_clearance: float,
    end_clearance: float,
    to_px: ToPixels,
) -> Optional[Path]:
    """Copy of ``path`` shortened by the given pixel clearances at both ends.

    Cubic end segments move their adjacent control point along with the end
    point so the end tangents keep their direction. Returns ``None`` when the
    clearances are longer than the path itself.
    """
    vertices = np.array(path.vertices, dtype=float)
    codes = None if path.codes is None else np.array(path.codes)
    last = _last_vertex_index(path)

    start = vertices[0].copy()
    end = vertices[last].copy()
    new_start = slide_from_start(path, start, start_clearance, to_px)
    new_end = slide_toward(path, end, end_clearance, to_px)

    project = _as_projection(to_px)
    before = project(end) - project(start)
    after = project(new_end) - project(new_start)
    if np.any(before) and float(np.dot(before, after)) <= 0:
        logger.debug("Clearances exceed the edge length, edge dropped")
        return None

    vertices[0] = new_start
    vertices[last] = new_end
    if codes is not None and len(vertices) > 2:
        if codes[1] == Path.CURVE4:
            vertices[1] += new_start - start
        if codes[last] == Path.CURVE4:
            vertices[last - 1] += new_end - end
    return Path(vertices, codes)


def pixel_angle(path: Path, t: float, to_px: ToPixels) -> float:
    """Angle (radians) of the path tangent at ``t`` as seen on screen."""
    project = _as_projection(to_px)
    direction = project(tangent(path, t)) - project((0.0, 0.0))
    return math.atan2(direction[1], direction[0])


def end_point(path: Path) -> np.ndarray:
    """Last drawn vertex of ``path``."""
    return np.array(path.vertices[_last_vertex_index(path)], dtype=float)
