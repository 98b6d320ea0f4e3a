# region Imports
from typing import Optional, Sequence, Tuple
import numpy as np
from city_partition.config import SEED_MASK
from city_partition.models import Category, CityConfig, DISTRICT_CATEGORIES, Site
# endregion

# region Random Stream
def seeded_rng(seed: Optional[int]) -> np.random.Generator:
    """Session stream for any int seed (negatives included); None draws fresh entropy."""
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng(int(seed) & SEED_MASK)
# endregion

# region Site Count
def draw_site_count(
    rng: np.random.Generator,
    site_count: Optional[int],
    min_sites: int,
    max_sites: int,
) -> int:
    """Fixed count, or one uniform draw from [min_sites, max_sites). min == max returns min without drawing."""
    if site_count is not None:
        return int(site_count)
    if min_sites == max_sites:
        return int(min_sites)
    return int(rng.integers(min_sites, max_sites))
# endregion

# region Site Placement
def generate_sites(
    rng: np.random.Generator,
    W: int,
    H: int,
    count: int,
    categories: Sequence[Category] = DISTRICT_CATEGORIES,
) -> Tuple[Site, ...]:
    """
    Draw `count` sites uniformly within bounds, with replacement.
    Draw order per site: x, y, category index. Duplicate coordinates are kept.
    """
    sites = []
    for _ in range(count):
        x = int(rng.integers(0, W))
        y = int(rng.integers(0, H))
        cat = categories[int(rng.integers(0, len(categories)))]
        sites.append(Site(x, y, Category(cat)))
    return tuple(sites)


def sites_from_config(rng: np.random.Generator, cfg: CityConfig) -> Tuple[Site, ...]:
    n = draw_site_count(rng, cfg.site_count, cfg.min_sites, cfg.max_sites)
    return generate_sites(rng, cfg.width, cfg.height, n, cfg.site_categories)
# endregion
