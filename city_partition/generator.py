# region Imports
from dataclasses import replace
from typing import Optional, Sequence
import logging, threading, time
import numpy as np

from city_partition.buildings import resolve_placements, validate_handles
from city_partition.lattice import carve_block_roads
from city_partition.metrics import compute_grid_metrics
from city_partition.models import CityConfig, CityGrid, CityResult, Metric, Placement
from city_partition.partition import partition_grid
from city_partition.sites import seeded_rng, sites_from_config
# endregion

logger = logging.getLogger(__name__)


# region Placement Consumers
class PlacementConsumer:
    """Receives the placements of each finished city. clear() always precedes place()."""

    def clear(self) -> None:
        pass

    def place(self, placements: Sequence[Placement]) -> None:
        raise NotImplementedError


class ListConsumer(PlacementConsumer):
    def __init__(self):
        self.placements = []
        self.clears = 0

    def clear(self) -> None:
        self.placements = []
        self.clears += 1

    def place(self, placements: Sequence[Placement]) -> None:
        self.placements.extend(placements)
# endregion

# region Pipeline
def build_grid(cfg: CityConfig, rng: np.random.Generator) -> CityGrid:
    sites = sites_from_config(rng, cfg)
    grid = partition_grid(
        cfg.width, cfg.height, sites, cfg.metric,
        suppress_border_near_road=cfg.suppress_border_near_road,
        major_road_thickness=cfg.major_road_thickness,
    )
    return carve_block_roads(grid, cfg.block_size).freeze()


def build_city(cfg: CityConfig, rng: np.random.Generator, generation: int = 0) -> CityResult:
    """Sites -> partition -> block lattice -> building selection, all into fresh buffers."""
    validate_handles(cfg)
    grid = build_grid(cfg, rng)
    placements = resolve_placements(grid, rng, cfg)
    return CityResult(config=cfg, grid=grid, placements=placements, generation=generation)
# endregion

# region Engine
class CityGenerator:
    """
    configure() / generate() / set_metric() driver API.

    Owns the session random stream: seeded once per configure(), consumed by
    every generate(). A pass runs under a lock and its result is published in
    one assignment, so readers only ever see a complete city.
    """

    def __init__(self, config: Optional[CityConfig] = None):
        self._lock = threading.Lock()
        self._result: Optional[CityResult] = None
        self.configure(config or CityConfig())

    def configure(self, config: CityConfig) -> None:
        config.validate()
        rng = seeded_rng(config.seed)
        with self._lock:
            self._config = config
            self._rng = rng
            self._generation = 0
        logger.info("Configured %dx%d city (seed=%s, metric=%s, block=%d)",
                    config.width, config.height, config.seed,
                    config.metric.value, config.block_size)

    # region Accessors
    @property
    def config(self) -> CityConfig:
        return self._config

    @property
    def metric(self) -> Metric:
        return self._config.metric

    @property
    def result(self) -> Optional[CityResult]:
        return self._result
    # endregion

    # region Metric Switching
    def set_metric(self, metric) -> Metric:
        """Applies to later generations only; the published city is untouched."""
        metric = Metric.parse(metric)
        with self._lock:
            self._config = replace(self._config, metric=metric)
        logger.info("Metric set to %s", metric.value)
        return metric

    def toggle_metric(self) -> Metric:
        return self.set_metric(self._config.metric.toggled())
    # endregion

    def generate(self, consumer: Optional[PlacementConsumer] = None, seed: Optional[int] = None) -> CityResult:
        with self._lock:
            cfg = self._config
            validate_handles(cfg)
            if seed is not None:
                self._rng = seeded_rng(seed)
            t0 = time.time()
            result = build_city(cfg, self._rng, generation=self._generation + 1)
            self._generation = result.generation
            self._result = result
            if consumer is not None:
                consumer.clear()
                consumer.place(result.placements)

        stats = compute_grid_metrics(result.grid, with_connectivity=False)
        logger.info("Generation %d: %d sites, %d placements, road fraction %.1f%% in %.3fs",
                    result.generation, stats["sites"], len(result.placements),
                    100.0 * stats["road_fraction"], time.time() - t0)
        return result
# endregion
