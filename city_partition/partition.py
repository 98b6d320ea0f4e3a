# region Imports
import logging
from typing import Sequence
import numpy as np
from city_partition.classifier import classify_grid
from city_partition.grid import backward_neighbors, raster_order
from city_partition.models import Category, CityGrid, Metric, Site
# endregion

logger = logging.getLogger(__name__)


# region Border Roads
def mark_border_roads(districts: np.ndarray, suppress_near_road: bool = False) -> np.ndarray:
    """
    Road mask for district borders, shape (W,H) bool.

    A cell is road when any cell of its backward neighbourhood (west, north,
    north-west) belongs to a different district. Neighbours off the grid are
    skipped. With suppress_near_road, a cell whose backward neighbourhood
    already holds a road keeps its district.
    """
    W, H = districts.shape
    roads = np.zeros((W, H), dtype=bool)
    for x, y in raster_order(W, H):
        nbrs = backward_neighbors(x, y)
        if suppress_near_road and any(roads[n] for n in nbrs):
            continue
        cur = districts[x, y]
        if any(districts[n] != cur for n in nbrs):
            roads[x, y] = True
    return roads


def thicken_roads(roads: np.ndarray, passes: int) -> np.ndarray:
    """Widen roads one cell per pass toward east/south; each pass reads the previous buffer."""
    out = roads.copy()
    for _ in range(passes):
        prev = out
        out = prev.copy()
        out[1:, :] |= prev[:-1, :]
        out[:, 1:] |= prev[:, :-1]
        out[1:, 1:] |= prev[:-1, :-1]
    return out
# endregion

# region Partitioner
def partition_grid(
    W: int,
    H: int,
    sites: Sequence[Site],
    metric=Metric.EUCLIDEAN,
    *,
    suppress_border_near_road: bool = False,
    major_road_thickness: int = 0,
) -> CityGrid:
    """Nearest-site districts plus border roads, built into fresh buffers."""
    districts = classify_grid(W, H, sites, metric)
    roads = mark_border_roads(districts, suppress_near_road=suppress_border_near_road)
    if major_road_thickness:
        roads = thicken_roads(roads, major_road_thickness)
    categories = np.where(roads, np.int8(Category.ROAD), districts).astype(np.int8)
    logger.debug("Partitioned %dx%d grid: %d border road cells", W, H, int(roads.sum()))
    return CityGrid(districts=districts, categories=categories,
                    sites=tuple(sites), metric=Metric.parse(metric))
# endregion
