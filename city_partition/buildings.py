# region Imports
from typing import FrozenSet, Iterable, List, Optional, Tuple
import numpy as np
from city_partition.config import MIXED_USE_PRIMARY, MIXED_USE_SECONDARY
from city_partition.models import (
    Archetype, Category, CityConfig, CityGrid, ConfigError, Placement,
)
# endregion

# region Archetype Tables
FIXED_ARCHETYPES = {
    Category.ROAD: Archetype.ROAD,
    Category.RESIDENTIAL: Archetype.RESIDENTIAL,
    Category.PARK: Archetype.PARK,
    Category.INDUSTRIAL: Archetype.INDUSTRIAL,
}

# (primary, secondary, tertiary) for mixed-use districts
MIXED_USE_ARCHETYPES = {
    Category.MARKET: (Archetype.MARKET, Archetype.RESIDENTIAL, Archetype.BUSINESS),
    Category.BUSINESS: (Archetype.BUSINESS, Archetype.MARKET, Archetype.RESIDENTIAL),
}
# endregion

# region Selection
def resolve_mixed_use(category: Category, roll: float) -> Archetype:
    primary, secondary, tertiary = MIXED_USE_ARCHETYPES[category]
    if roll <= MIXED_USE_PRIMARY:
        return primary
    if roll <= MIXED_USE_SECONDARY:
        return secondary
    return tertiary


def select_archetype(category: Category, rng: np.random.Generator) -> Archetype:
    """Fixed categories map directly; Market/Business consume one uniform draw."""
    category = Category(category)
    if category in MIXED_USE_ARCHETYPES:
        return resolve_mixed_use(category, float(rng.random()))
    return FIXED_ARCHETYPES[category]


def draw_height(rng: np.random.Generator, height_range: Tuple[float, float]) -> float:
    hmin, hmax = height_range
    return float(rng.uniform(hmin, hmax))
# endregion

# region Handle Validation
def reachable_archetypes(site_categories: Iterable[Category], emit_roads: bool = True) -> FrozenSet[Archetype]:
    out = set()
    for c in site_categories:
        c = Category(c)
        if c in MIXED_USE_ARCHETYPES:
            out.update(MIXED_USE_ARCHETYPES[c])
        else:
            out.add(FIXED_ARCHETYPES[c])
    if emit_roads:
        out.add(Archetype.ROAD)
    return frozenset(out)


def validate_handles(cfg: CityConfig) -> None:
    """Every reachable archetype needs a handle when handles are configured."""
    if cfg.archetype_handles is None:
        return
    needed = reachable_archetypes(cfg.site_categories, cfg.emit_roads)
    missing = sorted(a.value for a in needed if a not in cfg.archetype_handles)
    if missing:
        raise ConfigError(f"Missing archetype handles for: {', '.join(missing)}")
# endregion

# region Placement Resolution
def resolve_placements(
    grid: CityGrid,
    rng: np.random.Generator,
    cfg: CityConfig,
) -> Tuple[Placement, ...]:
    """
    Walk the finished grid in raster order and resolve one placement per cell.

    Draw order per non-road cell: the mixed-use roll (Market/Business only),
    then the height multiplier when jitter is on and the archetype is not a park.
    Road cells draw nothing and emit only when cfg.emit_roads is set.
    """
    handles = cfg.archetype_handles or {}
    scale = 1.0 / cfg.scale_divisor
    out: List[Placement] = []
    for (x, y), cat in grid.cells():
        if cat == Category.ROAD:
            if cfg.emit_roads:
                out.append(Placement(x, y, cat, Archetype.ROAD, None, scale,
                                     handles.get(Archetype.ROAD)))
            continue
        arch = select_archetype(cat, rng)
        height: Optional[float] = None
        if cfg.height_jitter and arch != Archetype.PARK:
            height = draw_height(rng, cfg.height_range)
        out.append(Placement(x, y, cat, arch, height, scale, handles.get(arch)))
    return tuple(out)
# endregion
