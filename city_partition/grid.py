# region Imports
from typing import Iterator, List, Tuple
import numpy as np
from city_partition.config import CATEGORY_COLORS
from city_partition.models import Category
# endregion

# West, north, north-west: already visited in raster order (x outer, y inner)
BACKWARD_OFFSETS = ((-1, 0), (0, -1), (-1, -1))


# region Traversal
def raster_order(W: int, H: int) -> Iterator[Tuple[int, int]]:
    for x in range(W):
        for y in range(H):
            yield (x, y)


def backward_neighbors(x: int, y: int) -> List[Tuple[int, int]]:
    """Backward neighbourhood of (x, y); neighbours off the grid (x=0 or y=0) are skipped."""
    out = []
    for dx, dy in BACKWARD_OFFSETS:
        nx, ny = x + dx, y + dy
        if nx >= 0 and ny >= 0:
            out.append((nx, ny))
    return out
# endregion

# region Buffers
def coords_of(W: int, H: int) -> Tuple[np.ndarray, np.ndarray]:
    """(xs, ys) index arrays shaped (W,H), matching grid[x, y] indexing."""
    return np.meshgrid(np.arange(W), np.arange(H), indexing="ij")
# endregion

# region Rendering
def grid_to_rgb(grid) -> np.ndarray:
    """(H,W,3) uint8 image of a CityGrid, row = y, column = x."""
    lut = np.zeros((len(Category), 3), dtype=np.uint8)
    for c in Category:
        lut[int(c)] = CATEGORY_COLORS[c.name.lower()]
    return lut[grid.categories.T.astype(np.intp)]
# endregion
