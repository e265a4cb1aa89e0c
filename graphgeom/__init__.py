"""Geometry and placement for graph plots: attributes, marker clearances, edge trimming and label alignment."""

from .attributes import (
    edge_keys,
    get_attr,
    is_single_attribute,
    resolve,
    resolve_edge_attribute,
    resolve_vertex_attribute,
)
from .edge_paths import (
    curved_path,
    interpolate,
    polyline_path,
    slide_from_start,
    slide_toward,
    straight_path,
    tangent,
    trim_path,
)
from .geometry import EdgeGeometry, GraphGeometry, compute_graph_geometry
from .graph_model import Edge, Graph, from_networkx, positions_from_layout
from .label_alignment import (
    DEFAULT_LABEL_ALIGN,
    align_to_dir,
    angle_to_alignment,
    compute_auto_label_aligns,
)
from .markers import MarkerShape, clearance, marker_half_extent, marker_radius, to_mpl_marker
from .plotting import GraphPlot, draw_geometry, graphplot

__all__ = [
    "DEFAULT_LABEL_ALIGN",
    "Edge",
    "EdgeGeometry",
    "Graph",
    "GraphGeometry",
    "GraphPlot",
    "MarkerShape",
    "align_to_dir",
    "angle_to_alignment",
    "clearance",
    "compute_auto_label_aligns",
    "compute_graph_geometry",
    "curved_path",
    "draw_geometry",
    "edge_keys",
    "from_networkx",
    "get_attr",
    "graphplot",
    "interpolate",
    "is_single_attribute",
    "marker_half_extent",
    "marker_radius",
    "polyline_path",
    "positions_from_layout",
    "resolve",
    "resolve_edge_attribute",
    "resolve_vertex_attribute",
    "slide_from_start",
    "slide_toward",
    "straight_path",
    "tangent",
    "to_mpl_marker",
    "trim_path",
]
