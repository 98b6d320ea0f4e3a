# region Imports
import numpy as np
from city_partition.grid import coords_of
from city_partition.models import Category, CityGrid
# endregion


# region Block Road Carver
def lattice_mask(W: int, H: int, block_size: int) -> np.ndarray:
    """Cells on the block lattice: x % block_size == 0 or y % block_size == 0."""
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    xs, ys = coords_of(W, H)
    return (xs % block_size == 0) | (ys % block_size == 0)


def carve_block_roads(grid: CityGrid, block_size: int) -> CityGrid:
    """
    Overlay the block lattice as roads on a copy of the grid.
    Park districts are exempt; existing roads are never removed.
    """
    on_lattice = lattice_mask(grid.width, grid.height, block_size)
    carve = on_lattice & (grid.districts != Category.PARK)
    categories = np.where(carve, np.int8(Category.ROAD), grid.categories).astype(np.int8)
    return CityGrid(districts=grid.districts.copy(), categories=categories,
                    sites=grid.sites, metric=grid.metric)
# endregion
