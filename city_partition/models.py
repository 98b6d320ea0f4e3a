# models.py
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple
import numpy as np

from city_partition.config import (
    DEFAULT_SEED, DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_MIN_SITES,
    DEFAULT_MAX_SITES, DEFAULT_BLOCK_SIZE, DEFAULT_HEIGHT_RANGE,
)


class ConfigError(ValueError):
    """Invalid city configuration."""


class Category(IntEnum):
    ROAD = 0
    RESIDENTIAL = 1
    PARK = 2
    INDUSTRIAL = 3
    MARKET = 4
    BUSINESS = 5

    @classmethod
    def parse(cls, value) -> "Category":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ConfigError(f"Unknown category: {value!r}") from None
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ConfigError(f"Unknown category: {value!r}") from None


# Road is reserved for carved cells
DISTRICT_CATEGORIES = (
    Category.RESIDENTIAL,
    Category.PARK,
    Category.INDUSTRIAL,
    Category.MARKET,
    Category.BUSINESS,
)


class Archetype(str, Enum):
    ROAD = "road"
    RESIDENTIAL = "residential"
    PARK = "park"
    INDUSTRIAL = "industrial"
    MARKET = "market"
    BUSINESS = "business"


class Metric(str, Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"

    @classmethod
    def parse(cls, value) -> "Metric":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(
                f"Unknown metric {value!r}; expected 'euclidean' or 'manhattan'"
            ) from None

    def toggled(self) -> "Metric":
        return Metric.MANHATTAN if self is Metric.EUCLIDEAN else Metric.EUCLIDEAN


@dataclass(frozen=True)
class Site:
    x: int
    y: int
    category: Category

    @property
    def coord(self) -> Tuple[int, int]:
        return (self.x, self.y)


# region City Configuration
INTEGER_FIELDS = ("width", "height", "site_count", "min_sites", "max_sites",
                  "seed", "block_size", "major_road_thickness")


@dataclass
class CityConfig:
    """
    width, height:   grid bounds in cells
    site_count:      fixed number of sites; when None the count is drawn from [min_sites, max_sites)
    metric:          'euclidean' or 'manhattan'
    block_size:      spacing of the block road lattice
    major_road_thickness: extra one-cell widening passes applied to border roads
    suppress_border_near_road: skip the border override when a backward neighbour is already road
    height_jitter:   draw a height multiplier per building from height_range
    emit_roads:      emit a road placement per road cell (otherwise road cells emit nothing)
    archetype_handles: optional archetype name -> opaque handle for the placement consumer
    """
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    site_count: Optional[int] = None
    min_sites: int = DEFAULT_MIN_SITES
    max_sites: int = DEFAULT_MAX_SITES
    seed: Optional[int] = DEFAULT_SEED
    metric: Metric = Metric.EUCLIDEAN
    block_size: int = DEFAULT_BLOCK_SIZE
    major_road_thickness: int = 0
    suppress_border_near_road: bool = False
    height_jitter: bool = True
    height_range: Tuple[float, float] = DEFAULT_HEIGHT_RANGE
    scale_divisor: float = 1.0
    emit_roads: bool = True
    site_categories: Tuple[Category, ...] = DISTRICT_CATEGORIES
    archetype_handles: Optional[Dict[Archetype, Any]] = None

    def __post_init__(self):
        self.metric = Metric.parse(self.metric)
        try:
            self.site_categories = tuple(Category.parse(c) for c in self.site_categories)
            self.height_range = tuple(float(v) for v in self.height_range)
            self.scale_divisor = float(self.scale_divisor)
            handles = self.archetype_handles
            if handles is not None:
                self.archetype_handles = {}
                for key, handle in handles.items():
                    self.archetype_handles[Archetype(str(getattr(key, "value", key)).lower())] = handle
        except ConfigError:
            raise
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigError(f"Malformed configuration: {e}") from e
        self.validate()

    def validate(self) -> None:
        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            if value is None and name in ("site_count", "seed"):
                continue
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Grid size must be positive (width={self.width}, height={self.height})")
        if self.block_size <= 0:
            raise ConfigError(f"block_size must be positive, got {self.block_size}")
        if self.site_count is not None:
            if self.site_count <= 0:
                raise ConfigError(f"site_count must be positive, got {self.site_count}")
        else:
            if self.min_sites <= 0:
                raise ConfigError(f"min_sites must be positive, got {self.min_sites}")
            if self.min_sites > self.max_sites:
                raise ConfigError(
                    f"min_sites ({self.min_sites}) is greater than max_sites ({self.max_sites})"
                )
        if self.major_road_thickness < 0:
            raise ConfigError(f"major_road_thickness must be >= 0, got {self.major_road_thickness}")
        if not self.site_categories:
            raise ConfigError("site_categories must name at least one district category")
        if Category.ROAD in self.site_categories:
            raise ConfigError("Road is reserved and cannot be a site category")
        if len(self.height_range) != 2:
            raise ConfigError(f"height_range must be (min, max), got {self.height_range}")
        hmin, hmax = self.height_range
        if hmin < 0 or hmin > hmax:
            raise ConfigError(f"Invalid height_range ({hmin}, {hmax})")
        if self.scale_divisor <= 0:
            raise ConfigError(f"scale_divisor must be positive, got {self.scale_divisor}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CityConfig":
        """Build a config from a JSON-like mapping; unknown keys are ignored."""
        def opt(v, conv):
            return None if v in (None, "", "null") else conv(v)

        def flag(v):
            if isinstance(v, str):
                return v.strip().lower() in ("1", "true", "yes", "on")
            return bool(v)

        try:
            kwargs = dict(
                width=int(data.get("width", DEFAULT_WIDTH)),
                height=int(data.get("height", DEFAULT_HEIGHT)),
                site_count=opt(data.get("site_count"), int),
                min_sites=int(data.get("min_sites", DEFAULT_MIN_SITES)),
                max_sites=int(data.get("max_sites", DEFAULT_MAX_SITES)),
                seed=opt(data.get("seed", DEFAULT_SEED), int),
                metric=data.get("metric", Metric.EUCLIDEAN.value),
                block_size=int(data.get("block_size", DEFAULT_BLOCK_SIZE)),
                major_road_thickness=int(data.get("major_road_thickness", 0)),
                suppress_border_near_road=flag(data.get("suppress_border_near_road", False)),
                height_jitter=flag(data.get("height_jitter", True)),
                height_range=tuple(data.get("height_range", DEFAULT_HEIGHT_RANGE)),
                scale_divisor=float(data.get("scale_divisor", 1.0)),
                emit_roads=flag(data.get("emit_roads", True)),
                archetype_handles=data.get("archetype_handles"),
            )
            if data.get("site_categories") is not None:
                kwargs["site_categories"] = tuple(data["site_categories"])
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Malformed configuration: {e}") from e
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "site_count": self.site_count,
            "min_sites": self.min_sites,
            "max_sites": self.max_sites,
            "seed": self.seed,
            "metric": self.metric.value,
            "block_size": self.block_size,
            "major_road_thickness": self.major_road_thickness,
            "suppress_border_near_road": self.suppress_border_near_road,
            "height_jitter": self.height_jitter,
            "height_range": list(self.height_range),
            "scale_divisor": self.scale_divisor,
            "emit_roads": self.emit_roads,
            "site_categories": [c.name.lower() for c in self.site_categories],
        }
# endregion


# region Grid and Placements
@dataclass
class CityGrid:
    districts: np.ndarray     # (W,H) int8, nearest-site category
    categories: np.ndarray    # (W,H) int8, final category (road overrides)
    sites: Tuple[Site, ...] = ()
    metric: Metric = Metric.EUCLIDEAN

    @property
    def width(self) -> int:
        return int(self.categories.shape[0])

    @property
    def height(self) -> int:
        return int(self.categories.shape[1])

    @property
    def roads(self) -> np.ndarray:
        return self.categories == Category.ROAD

    def category_at(self, x: int, y: int) -> Category:
        return Category(int(self.categories[x, y]))

    def cells(self) -> Iterator[Tuple[Tuple[int, int], Category]]:
        for x in range(self.width):
            for y in range(self.height):
                yield (x, y), Category(int(self.categories[x, y]))

    def freeze(self) -> "CityGrid":
        self.districts.flags.writeable = False
        self.categories.flags.writeable = False
        return self


@dataclass(frozen=True)
class Placement:
    x: int
    y: int
    category: Category
    archetype: Archetype
    height: Optional[float] = None
    scale: float = 1.0
    handle: Any = None

    @property
    def y_offset(self) -> float:
        # keeps the base at ground level
        return 0.0 if self.height is None else self.height / 2.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "category": self.category.name.lower(),
            "archetype": self.archetype.value,
            "height": self.height,
            "y_offset": self.y_offset,
            "scale": self.scale,
        }


@dataclass
class CityResult:
    config: CityConfig
    grid: CityGrid
    placements: Tuple[Placement, ...] = field(default_factory=tuple)
    generation: int = 0
# endregion
