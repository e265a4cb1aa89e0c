from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np
from matplotlib.patches import PathPatch
from matplotlib.transforms import Affine2D

try:
    from . import config
    from .geometry import GraphGeometry, compute_graph_geometry
    from .graph_model import Graph, as_positions
    from .markers import marker_half_extent, marker_path, to_mpl_marker
except ImportError:  # Fallback for direct execution
    import config  # type: ignore
    from geometry import GraphGeometry, compute_graph_geometry  # type: ignore
    from graph_model import Graph, as_positions  # type: ignore
    from markers import marker_half_extent, marker_path, to_mpl_marker  # type: ignore

logger = logging.getLogger(__name__)


@dataclass
class GraphPlot:
    """Artists created for one graph, grouped by role."""

    geometry: GraphGeometry
    edge_artists: List[Any] = field(default_factory=list)
    node_artists: List[Any] = field(default_factory=list)
    arrow_artists: List[Any] = field(default_factory=list)
    label_artists: List[Any] = field(default_factory=list)


def _marker_area(marker: Any, size_pixels: float, dpi: float) -> float:
    # scatter() sizes are areas in points^2; draw the marker at its footprint size.
    size_points = marker_half_extent(marker) * size_pixels * 72 / dpi
    return size_points ** 2


def draw_geometry(
    ax,
    geometry: GraphGeometry,
    *,
    nlabels_fontsize: float = config.DEFAULT_LABEL_FONTSIZE,
    nlabels_color: Any = config.DEFAULT_LABEL_COLOR,
) -> GraphPlot:
    """Draw a computed geometry onto a matplotlib ``Axes``."""
    dpi = ax.figure.dpi
    plot = GraphPlot(geometry=geometry)

    # 1. Edges
    for edge in geometry.edges:
        if edge.path is None:
            continue
        patch = PathPatch(
            edge.path,
            facecolor="none",
            edgecolor=edge.color,
            linewidth=edge.width,
            capstyle="round",
            joinstyle="round",
            zorder=1,
        )
        ax.add_patch(patch)
        plot.edge_artists.append(patch)

    # 2. Arrow heads, rotated in pixel space
    for edge in geometry.edges:
        if edge.arrow_position is None:
            continue
        arrow = marker_path(edge.arrow_marker).transformed(Affine2D().rotate(edge.arrow_angle))
        artist = ax.scatter(
            [edge.arrow_position[0]],
            [edge.arrow_position[1]],
            s=_marker_area(edge.arrow_marker, edge.arrow_size, dpi),
            marker=arrow,
            color=[edge.color],
            linewidths=0,
            zorder=2,
        )
        plot.arrow_artists.append(artist)

    # 3. Nodes, one scatter per marker kind
    groups: Dict[Any, List[int]] = {}
    for index, marker in enumerate(geometry.node_markers):
        groups.setdefault(marker, []).append(index)
    for marker, indices in groups.items():
        artist = ax.scatter(
            geometry.positions[indices, 0],
            geometry.positions[indices, 1],
            s=[_marker_area(marker, geometry.node_sizes[i], dpi) for i in indices],
            marker=to_mpl_marker(marker),
            color=[geometry.node_colors[i] for i in indices],
            linewidths=0,
            zorder=3,
        )
        plot.node_artists.append(artist)

    # 4. Labels
    if geometry.node_labels is not None:
        for index, label in enumerate(geometry.node_labels):
            if label is None:
                continue
            halign, valign = geometry.label_aligns[index]
            offset = geometry.label_offsets[index]
            artist = ax.annotate(
                str(label),
                xy=tuple(geometry.positions[index]),
                xytext=(float(offset[0]), float(offset[1])),
                textcoords="offset pixels",
                ha=halign,
                va=valign,
                fontsize=nlabels_fontsize,
                color=nlabels_color,
                zorder=4,
            )
            plot.label_artists.append(artist)

    logger.debug(
        f"Drew {len(plot.edge_artists)} edges, {len(plot.arrow_artists)} arrows "
        f"and {len(plot.label_artists)} labels"
    )
    return plot


def graphplot(ax, graph: Graph, positions, *, autoscale: bool = True, **attributes: Any) -> GraphPlot:
    """Compute the geometry of ``graph`` for the current view of ``ax`` and draw it.

    With ``autoscale`` the data limits are fitted to the node positions before
    the geometry pass, because edge trimming depends on ``ax.transData``.
    Changing the limits or the figure size afterwards requires a redraw.
    """
    points = as_positions(positions, graph.num_vertices)
    if autoscale and len(points):
        ax.update_datalim(points[: graph.num_vertices])
        ax.autoscale_view()

    fontsize = attributes.pop("nlabels_fontsize", None)
    color = attributes.pop("nlabels_color", None)
    geometry = compute_graph_geometry(graph, points, ax.transData, **attributes)
    return draw_geometry(
        ax,
        geometry,
        nlabels_fontsize=config.DEFAULT_LABEL_FONTSIZE if fontsize is None else fontsize,
        nlabels_color=config.DEFAULT_LABEL_COLOR if color is None else color,
    )
