from __future__ import annotations

import bisect
import logging
import math
from typing import List, Sequence, Tuple, Union

import numpy as np

try:
    from .graph_model import Graph, as_positions
except ImportError:  # Fallback for direct execution
    from graph_model import Graph, as_positions  # type: ignore

logger = logging.getLogger(__name__)

Alignment = Tuple[str, str]

DEFAULT_LABEL_ALIGN: Alignment = ("right", "bottom")

# Gaps closer than this are treated as ties; the first one in sorted order wins.
GAP_TOLERANCE = 1e-9

TWO_PI = 2 * math.pi

# Upper bounds of the NE..SE sectors; anything below the first or above the
# last bound lies in the East sector.
_SECTOR_BOUNDS = [(2 * k + 1) * math.pi / 8 for k in range(8)]

# Alignment semantics follow matplotlib's ha/va: ("left", "center") puts the
# label's left edge on the anchor, so the label extends to the East.
_SECTOR_ALIGNMENTS: List[Alignment] = [
    ("left", "center"),    # E
    ("left", "bottom"),    # NE
    ("center", "bottom"),  # N
    ("right", "bottom"),   # NW
    ("right", "center"),   # W
    ("right", "top"),      # SW
    ("center", "top"),     # S
    ("left", "top"),       # SE
]


def angle_to_alignment(angle: float) -> Alignment:
    """Map a placement direction (radians) to the alignment of one of 8 sectors."""
    normalized = angle % TWO_PI
    sector = bisect.bisect_right(_SECTOR_BOUNDS, normalized) % 8
    return _SECTOR_ALIGNMENTS[sector]


def _bearings(graph: Graph, positions: np.ndarray, vertex: int) -> List[float]:
    origin = positions[vertex]
    neighbors = graph.in_neighbors(vertex) + graph.out_neighbors(vertex)
    angles = []
    for neighbor in neighbors:
        dx, dy = positions[neighbor] - origin
        if dx == 0 and dy == 0:
            # Self-loops and coincident nodes carry no direction.
            continue
        angles.append(math.atan2(dy, dx))
    return angles


def widest_gap_direction(angles: Sequence[float]) -> float:
    """Midpoint angle of the widest circular gap between ``angles``."""
    ordered = sorted(angle % TWO_PI for angle in angles)
    best_gap = -1.0
    best_midpoint = 0.0
    for index, current in enumerate(ordered):
        if index == len(ordered) - 1:
            gap = TWO_PI - current + ordered[0]
        else:
            gap = ordered[index + 1] - current
        if gap > best_gap + GAP_TOLERANCE:
            best_gap = gap
            best_midpoint = current + gap / 2
    return best_midpoint % TWO_PI


def compute_auto_label_aligns(
    graph: Graph,
    positions,
    fallback: Union[Alignment, Sequence[Alignment], None] = None,
) -> List[Alignment]:
    """Compute a label alignment for each node that keeps the label off its edges.

    For every node the bearings toward all incoming and outgoing neighbors
    are collected, the widest angular gap between them is found and the label
    is placed in the middle of that gap. Nodes without usable bearings get
    ``fallback`` (a single alignment or one per node), which defaults to
    ``DEFAULT_LABEL_ALIGN``.
    """
    points = as_positions(positions, graph.num_vertices)
    aligns: List[Alignment] = []
    for vertex in graph.vertices():
        angles = _bearings(graph, points, vertex)
        if not angles:
            logger.debug(f"Vertex {vertex} has no edge directions, using fallback alignment")
            if fallback is None:
                aligns.append(DEFAULT_LABEL_ALIGN)
            elif isinstance(fallback, list):
                aligns.append(tuple(fallback[vertex]))
            else:
                aligns.append(tuple(fallback))
            continue
        aligns.append(angle_to_alignment(widest_gap_direction(angles)))
    return aligns


def align_to_dir(align: Alignment) -> np.ndarray:
    """Unit vector pointing from the anchor toward the label body of ``align``."""
    halign, valign = align
    x = {"left": 1.0, "right": -1.0}.get(halign, 0.0)
    y = {"bottom": 1.0, "top": -1.0}.get(valign, 0.0)
    norm = math.hypot(x, y) or 1.0
    return np.array([x / norm, y / norm])
