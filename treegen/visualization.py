"""
Diagnostic previews of a tree skeleton.

Flat projections for checking shape and branching at a glance; this is not
a mesh renderer. Segments are drawn as lines whose width follows the mean
segment radius, branch points and terminals as markers, leaves as dots.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from treegen.pipeline import TreeResult
from treegen.skeleton import Skeleton

# Plane name -> (horizontal axis index, vertical axis index)
PLANES = {
    "xy": (0, 1),  # Front view
    "zy": (2, 1),  # Side view
    "xz": (0, 2),  # Top view
}

BARK_COLOR = "#6b4a32"
LEAF_COLOR = "#2e8b3a"
BRANCH_POINT_COLOR = "#c0392b"
TERMINAL_COLOR = "#e6b422"


def plot_skeleton(
    skeleton: Skeleton,
    ax: plt.Axes | None = None,
    plane: str = "xy",
    show_leaves: bool = True,
    show_markers: bool = True,
    line_scale: float = 40.0,
):
    """
    Draw a skeleton projected onto one coordinate plane.

    Args:
        skeleton: Skeleton to draw
        ax: Axes to draw into; a new figure is created when None
        plane: One of "xy", "zy", "xz"
        show_leaves: Draw leaf points
        show_markers: Mark branch points and terminal nodes
        line_scale: Line width per world unit of radius

    Returns:
        (fig, ax)
    """
    if plane not in PLANES:
        raise ValueError(f"Unknown plane {plane!r}; choose from {sorted(PLANES)}")
    h, v = PLANES[plane]

    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 8))
    else:
        fig = ax.figure

    for segment in skeleton.segments:
        start = skeleton.node(segment.start_node_id).position
        end = skeleton.node(segment.end_node_id).position
        width = max(0.5, line_scale * (segment.start_radius + segment.end_radius) / 2)
        ax.plot([start[h], end[h]], [start[v], end[v]], color=BARK_COLOR,
                linewidth=width, solid_capstyle="round", zorder=1)

    if show_markers and skeleton.nodes:
        branch_points = skeleton.branch_points()
        if branch_points:
            pts = np.stack([node.position for node in branch_points])
            ax.scatter(pts[:, h], pts[:, v], s=12, color=BRANCH_POINT_COLOR, zorder=3,
                       label="branch points")
        terminals = [node for node in skeleton.terminals() if node.id != 0]
        if terminals:
            pts = np.stack([node.position for node in terminals])
            ax.scatter(pts[:, h], pts[:, v], s=8, color=TERMINAL_COLOR, zorder=3,
                       label="terminals")

    if show_leaves and skeleton.leaves:
        pts = np.stack([leaf.position for leaf in skeleton.leaves])
        ax.scatter(pts[:, h], pts[:, v], s=18, color=LEAF_COLOR, alpha=0.7, zorder=2,
                   label="leaves")

    ax.set_aspect("equal", adjustable="datalim")
    ax.set_xlabel(plane[0])
    ax.set_ylabel(plane[1])
    return fig, ax


def render_tree_preview(result: TreeResult, figsize: tuple = (12, 8)):
    """Front and side views of a generated tree with its stats in the title."""
    fig, (front, side) = plt.subplots(1, 2, figsize=figsize)
    plot_skeleton(result.skeleton, ax=front, plane="xy")
    plot_skeleton(result.skeleton, ax=side, plane="zy")
    front.set_title("Front")
    side.set_title("Side")

    stats = result.stats
    fig.suptitle(
        f"{stats.segment_count} segments, {stats.leaf_count} leaves, "
        f"{stats.triangle_count} triangles"
    )
    return fig, (front, side)


def save_skeleton_preview(filepath: str, result: TreeResult, dpi: int = 150) -> None:
    """Render the front/side preview and save it to file."""
    fig, _ = render_tree_preview(result)
    fig.savefig(filepath, dpi=dpi, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    print(f"Saved to {filepath}")
