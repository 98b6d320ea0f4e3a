# region Imports
import numpy as np
import pyvista as pv

from city_partition.config import CATEGORY_COLORS
from city_partition.generator import PlacementConsumer
# endregion

FLAT_HEIGHT = 0.1   # roads and parks are drawn as ground tiles


# region Placement 3D Plot
def placement_bounds(p, cell_size=1.0):
    """(xmin, xmax, ymin, ymax, zmin, zmax) of one placement; the base stays on the ground."""
    h = (p.height if p.height is not None else FLAT_HEIGHT) * p.scale
    cx = p.x * cell_size
    cy = p.y * cell_size
    half = 0.5 * cell_size * p.scale
    zc = h / 2.0
    return (cx - half, cx + half, cy - half, cy + half, zc - h / 2.0, zc + h / 2.0)


def plot_city_3d(placements, cell_size=1.0, title="City 3D"):
    """
    Render placements as boxes: buildings extruded to their height multiplier,
    roads and parks as flat tiles. Requires pyvista installed.
    """
    if not placements:
        raise ValueError("No placements to render.")

    # region Merge Boxes per Category
    p = pv.Plotter()
    by_cat = {}
    for pl in placements:
        by_cat.setdefault(pl.archetype.value, []).append(pl)
    for name, group in by_cat.items():
        mesh = pv.MultiBlock([pv.Box(bounds=placement_bounds(pl, cell_size)) for pl in group]).combine()
        color = np.array(CATEGORY_COLORS[name]) / 255.0
        p.add_mesh(mesh, color=color, show_edges=False)
    # endregion

    # region Final Display
    p.add_axes()
    p.show_grid()
    p.set_background("black")
    p.add_text(title, color="white")
    p.show()
    # endregion
# endregion


class PyVistaConsumer(PlacementConsumer):
    def __init__(self, cell_size=1.0, title="City 3D"):
        self.cell_size = cell_size
        self.title = title

    def place(self, placements):
        plot_city_3d(list(placements), cell_size=self.cell_size, title=self.title)
