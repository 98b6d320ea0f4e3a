# region Imports
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from matplotlib.lines import Line2D

from city_partition.grid import grid_to_rgb
from city_partition.config import CATEGORY_COLORS
from city_partition.generator import PlacementConsumer
from city_partition.models import Archetype, Category
# endregion

# region Figure Builder
def render_city_figure(grid, placements=(), title="City districts", show_sites=True, show_heights=True):
    """
    Draw the classified grid (x to the right, y down) with optional site markers
    and a building-height overlay. Returns the matplotlib Figure.
    """
    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(grid_to_rgb(grid), origin="upper", interpolation="nearest")

    # region Height Overlay
    heights = [p for p in placements if p.height is not None]
    if show_heights and heights:
        hmap = np.full((grid.height, grid.width), np.nan, dtype=np.float32)
        for p in heights:
            hmap[p.y, p.x] = p.height
        heat = ax.imshow(hmap, origin="upper", cmap="viridis", alpha=0.45, interpolation="nearest")
        cbar = fig.colorbar(heat, ax=ax, fraction=0.046, pad=0.04)
        cbar.set_label("Building height multiplier")
    # endregion

    # region Site Markers
    if show_sites and grid.sites:
        xs = [s.x for s in grid.sites]
        ys = [s.y for s in grid.sites]
        ax.scatter(xs, ys, s=60, edgecolors="black", facecolors="cyan", zorder=3)
    # endregion

    # region Legend / Layout
    legend_elements = [
        Patch(facecolor=np.array(CATEGORY_COLORS[c.name.lower()]) / 255.0,
              edgecolor="black", label=c.name.title())
        for c in Category
    ]
    if show_sites and grid.sites:
        legend_elements.append(Line2D([0], [0], marker="o", color="w", label="Site",
                                      markerfacecolor="cyan", markeredgecolor="black", markersize=9))
    ax.legend(handles=legend_elements, loc="lower right", fontsize=8, framealpha=0.85)
    ax.set_title(title)
    ax.set_axis_off()
    fig.tight_layout()
    # endregion
    return fig


def archetype_counts(placements):
    counts = {a.value: 0 for a in Archetype}
    for p in placements:
        counts[p.archetype.value] += 1
    return counts
# endregion

# region Consumer
class MatplotlibConsumer(PlacementConsumer):
    """Shows each generated city in a matplotlib window."""

    def __init__(self, generator, block=True):
        self.generator = generator
        self.block = block

    def clear(self):
        plt.close("all")

    def place(self, placements):
        result = self.generator.result
        title = f"City #{result.generation} ({result.config.metric.value})"
        render_city_figure(result.grid, placements, title=title)
        plt.show(block=self.block)
# endregion
