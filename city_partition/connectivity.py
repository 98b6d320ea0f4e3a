# region Imports
from collections import deque
from typing import Tuple
import numpy as np
# endregion

_STEPS4 = ((-1, 0), (1, 0), (0, -1), (0, 1))
_STEPS8 = _STEPS4 + ((-1, -1), (-1, 1), (1, -1), (1, 1))


# region Connected Components
def label_components(mask: np.ndarray, eight_connected: bool = True) -> Tuple[np.ndarray, int]:
    """
    Label connected True cells of a (W,H) mask.
    Returns (labels, count); labels are 1..count, 0 where mask is False.
    """
    W, H = mask.shape
    steps = _STEPS8 if eight_connected else _STEPS4
    labels = np.zeros((W, H), dtype=np.int32)
    count = 0

    for x in range(W):
        for y in range(H):
            if not mask[x, y] or labels[x, y]:
                continue
            count += 1
            labels[x, y] = count
            queue = deque([(x, y)])
            while queue:
                cx, cy = queue.popleft()
                for dx, dy in steps:
                    nx, ny = cx + dx, cy + dy
                    if 0 <= nx < W and 0 <= ny < H and mask[nx, ny] and not labels[nx, ny]:
                        labels[nx, ny] = count
                        queue.append((nx, ny))

    return labels, count


def road_components(roads: np.ndarray, eight_connected: bool = True) -> int:
    return label_components(roads, eight_connected)[1]
# endregion
