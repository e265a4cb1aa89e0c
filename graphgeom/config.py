"""
Default settings for the graph geometry pass and the matplotlib adapter.

This file contains all plot defaults so that a render pass is reproducible
without passing every attribute explicitly.
"""

from typing import Dict

# =============================================================================
# NODE SETTINGS
# =============================================================================
DEFAULT_NODE_MARKER = "circle"
DEFAULT_NODE_SIZE = 10.0  # pixels, diameter of the nominal marker box
DEFAULT_NODE_COLOR = (0.27, 0.51, 1.0, 1.0)

# =============================================================================
# EDGE SETTINGS
# =============================================================================
DEFAULT_EDGE_COLOR = (0.18, 0.21, 0.33, 1.0)
DEFAULT_EDGE_WIDTH = 1.0  # points

# Arrowheads are drawn at the destination boundary of directed edges
DEFAULT_ARROW_SHOW = None  # None means "only for directed graphs"
DEFAULT_ARROW_MARKER = "➤"
DEFAULT_ARROW_SIZE = 12.0

# Extra gap (pixels) left between the trimmed edge and the marker outline
DEFAULT_EDGE_GAP = 0.0

# =============================================================================
# LABEL SETTINGS
# =============================================================================
DEFAULT_LABEL_ALIGN = ("right", "bottom")  # fallback for isolated vertices
DEFAULT_LABEL_AUTO_ALIGN = False
DEFAULT_LABEL_OFFSET = 5.0  # pixels between the node center and the label anchor
DEFAULT_LABEL_FONTSIZE = 10.0
DEFAULT_LABEL_COLOR = (0.0, 0.0, 0.0, 1.0)

# =============================================================================
# PLOT DEFAULTS
# =============================================================================
PLOT_DEFAULTS = {
    "node_marker": DEFAULT_NODE_MARKER,
    "node_size": DEFAULT_NODE_SIZE,
    "node_color": DEFAULT_NODE_COLOR,
    "edge_color": DEFAULT_EDGE_COLOR,
    "edge_width": DEFAULT_EDGE_WIDTH,
    "edge_gap": DEFAULT_EDGE_GAP,
    "arrow_show": DEFAULT_ARROW_SHOW,
    "arrow_marker": DEFAULT_ARROW_MARKER,
    "arrow_size": DEFAULT_ARROW_SIZE,
    "nlabels_align": DEFAULT_LABEL_ALIGN,
    "nlabels_auto_align": DEFAULT_LABEL_AUTO_ALIGN,
    "nlabels_offset": DEFAULT_LABEL_OFFSET,
    "nlabels_fontsize": DEFAULT_LABEL_FONTSIZE,
    "nlabels_color": DEFAULT_LABEL_COLOR,
}

# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_default(name: str):
    """Get the default value of a single plot attribute."""
    if name not in PLOT_DEFAULTS:
        raise ValueError(f"Unknown plot attribute: {name}. Available: {list(PLOT_DEFAULTS.keys())}")
    return PLOT_DEFAULTS[name]


def get_plot_defaults(**overrides) -> Dict[str, object]:
    """Return a fresh copy of the plot defaults with ``overrides`` applied.

    Overrides set to ``None`` keep the default, except for ``arrow_show``
    where ``None`` is itself meaningful.
    """
    settings = dict(PLOT_DEFAULTS)
    for name, value in overrides.items():
        if name not in settings:
            raise ValueError(f"Unknown plot attribute: {name}. Available: {list(PLOT_DEFAULTS.keys())}")
        if value is None and name != "arrow_show":
            continue
        settings[name] = value
    return settings
