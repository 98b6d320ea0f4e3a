# region Imports
from typing import Sequence, Tuple
import numpy as np
from city_partition.geometry import get_metric
from city_partition.grid import coords_of
from city_partition.models import Category, Metric, Site
# endregion

# region Scalar Classifier
def nearest_site_index(coord: Tuple[int, int], sites: Sequence[Site], metric=Metric.EUCLIDEAN) -> int:
    """Linear scan; a later site replaces the best only when strictly closer."""
    if not sites:
        raise ValueError("Cannot classify against an empty site set.")
    dist = get_metric(metric)
    best_i = 0
    best_d = float("inf")
    for i, s in enumerate(sites):
        d = dist(coord, s.coord)
        if d < best_d:
            best_d = d
            best_i = i
    return best_i


def classify(coord: Tuple[int, int], sites: Sequence[Site], metric=Metric.EUCLIDEAN) -> Category:
    return sites[nearest_site_index(coord, sites, metric)].category
# endregion

# region Grid Classifier
def classify_grid(W: int, H: int, sites: Sequence[Site], metric=Metric.EUCLIDEAN) -> np.ndarray:
    """
    Nearest-site category for every cell, shape (W,H) int8.
    Same strict-< running minimum as the scalar scan, one site at a time.
    """
    if not sites:
        raise ValueError("Cannot classify against an empty site set.")
    dist = get_metric(metric)
    xs, ys = coords_of(W, H)
    best_d = np.full((W, H), np.inf)
    out = np.empty((W, H), dtype=np.int8)
    for s in sites:
        d = dist((xs, ys), s.coord)
        closer = d < best_d
        best_d[closer] = d[closer]
        out[closer] = int(s.category)
    return out
# endregion
