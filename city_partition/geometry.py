# region Imports
from typing import Callable
import numpy as np
from city_partition.models import Metric
# endregion

# region Distance Metrics
# Coordinates are (x, y) pairs of ints or of broadcastable numpy arrays.
def euclidean(a, b):
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return np.sqrt(dx * dx + dy * dy)


def manhattan(a, b):
    return np.abs(a[0] - b[0]) + np.abs(a[1] - b[1])
# endregion

# region Metric Lookup
_METRICS = {
    Metric.EUCLIDEAN: euclidean,
    Metric.MANHATTAN: manhattan,
}


def get_metric(metric) -> Callable:
    return _METRICS[Metric.parse(metric)]
# endregion
