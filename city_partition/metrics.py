# metrics.py
from typing import Any, Dict
import numpy as np
from city_partition.connectivity import road_components
from city_partition.models import Category, CityGrid


def compute_grid_metrics(grid: CityGrid, with_connectivity: bool = True) -> Dict[str, Any]:
    cats = grid.categories
    total = int(cats.size)
    counts = {c.name.lower(): int(np.count_nonzero(cats == c)) for c in Category}
    out: Dict[str, Any] = {
        "width": grid.width,
        "height": grid.height,
        "cells": total,
        "sites": len(grid.sites),
        "metric": grid.metric.value,
        "counts": counts,
        "fractions": {k: v / total for k, v in counts.items()},
        "road_fraction": counts["road"] / total,
    }
    if with_connectivity:
        out["road_components"] = road_components(grid.roads)
    return out
