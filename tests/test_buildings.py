"""Building archetype selection and placement resolution."""
from __future__ import annotations

import numpy as np
import pytest

from city_partition.buildings import (
    reachable_archetypes, resolve_mixed_use, resolve_placements, select_archetype, validate_handles,
)
from city_partition.lattice import carve_block_roads
from city_partition.models import Archetype, Category, CityConfig, ConfigError, Metric, Site
from city_partition.partition import partition_grid


@pytest.mark.parametrize("roll, expected", [
    (0.0, Archetype.MARKET),
    (0.75, Archetype.MARKET),
    (0.7500001, Archetype.RESIDENTIAL),
    (0.90, Archetype.RESIDENTIAL),
    (0.9000001, Archetype.BUSINESS),
    (0.999, Archetype.BUSINESS),
])
def test_market_thresholds(roll, expected):
    assert resolve_mixed_use(Category.MARKET, roll) == expected


@pytest.mark.parametrize("roll, expected", [
    (0.5, Archetype.BUSINESS),
    (0.8, Archetype.MARKET),
    (0.95, Archetype.RESIDENTIAL),
])
def test_business_thresholds(roll, expected):
    assert resolve_mixed_use(Category.BUSINESS, roll) == expected


@pytest.mark.parametrize("category, expected", [
    (Category.ROAD, Archetype.ROAD),
    (Category.RESIDENTIAL, Archetype.RESIDENTIAL),
    (Category.PARK, Archetype.PARK),
    (Category.INDUSTRIAL, Archetype.INDUSTRIAL),
])
def test_fixed_categories_draw_nothing(category, expected):
    rng = np.random.default_rng(0)
    state = rng.bit_generator.state
    assert select_archetype(category, rng) == expected
    assert rng.bit_generator.state == state


@pytest.mark.parametrize("category, expected", [
    (Category.MARKET, {Archetype.MARKET: 0.75, Archetype.RESIDENTIAL: 0.15, Archetype.BUSINESS: 0.10}),
    (Category.BUSINESS, {Archetype.BUSINESS: 0.75, Archetype.MARKET: 0.15, Archetype.RESIDENTIAL: 0.10}),
])
def test_mixed_use_distribution(category, expected):
    rng = np.random.default_rng(1234)
    n = 20000
    counts = {a: 0 for a in expected}
    for _ in range(n):
        counts[select_archetype(category, rng)] += 1
    for arch, p in expected.items():
        assert abs(counts[arch] / n - p) < 0.015


def test_reachable_archetypes():
    assert reachable_archetypes([Category.RESIDENTIAL], emit_roads=False) == {Archetype.RESIDENTIAL}
    assert reachable_archetypes([Category.MARKET]) == {
        Archetype.MARKET, Archetype.RESIDENTIAL, Archetype.BUSINESS, Archetype.ROAD}


def test_handle_validation():
    validate_handles(CityConfig())
    cfg = CityConfig(site_categories=("park", "industrial"),
                     archetype_handles={"park": "tree.obj", "road": "road.obj"})
    with pytest.raises(ConfigError, match="industrial"):
        validate_handles(cfg)
    ok = CityConfig(site_categories=("park",), emit_roads=False, archetype_handles={"park": "tree.obj"})
    validate_handles(ok)


def test_single_residential_site_example():
    grid = partition_grid(4, 4, [Site(0, 0, Category.RESIDENTIAL)], Metric.MANHATTAN)
    assert np.all(grid.categories == Category.RESIDENTIAL)
    cfg = CityConfig(width=4, height=4, site_count=1, metric="manhattan", block_size=100)
    placements = resolve_placements(grid.freeze(), np.random.default_rng(0), cfg)
    assert len(placements) == 16
    assert {p.archetype for p in placements} == {Archetype.RESIDENTIAL}

    # the lattice still passes through the origin row and column
    carved = carve_block_roads(grid, 100)
    assert {(int(x), int(y)) for x, y in np.argwhere(carved.roads)} == \
        {(x, y) for x in range(4) for y in range(4) if x == 0 or y == 0}


def _mixed_grid():
    sites = [Site(1, 1, Category.PARK), Site(12, 2, Category.MARKET),
             Site(3, 12, Category.BUSINESS), Site(12, 12, Category.INDUSTRIAL)]
    return carve_block_roads(partition_grid(15, 15, sites), 5).freeze()


def test_placements_follow_grid():
    grid = _mixed_grid()
    handles = {a: f"{a.value}.obj" for a in Archetype}
    cfg = CityConfig(width=15, height=15, scale_divisor=4.0, height_range=(2.0, 3.0),
                     archetype_handles=handles)
    placements = resolve_placements(grid, np.random.default_rng(7), cfg)
    assert len(placements) == 15 * 15
    assert [(p.x, p.y) for p in placements] == [(x, y) for x in range(15) for y in range(15)]
    for p in placements:
        assert p.category == grid.category_at(p.x, p.y)
        assert p.scale == 0.25
        assert p.handle == f"{p.archetype.value}.obj"
        if p.archetype in (Archetype.ROAD, Archetype.PARK):
            assert p.height is None and p.y_offset == 0.0
        else:
            assert 2.0 <= p.height <= 3.0
            assert p.y_offset == p.height / 2


def test_roads_can_be_left_out():
    grid = _mixed_grid()
    cfg = CityConfig(width=15, height=15, emit_roads=False, height_jitter=False)
    placements = resolve_placements(grid, np.random.default_rng(7), cfg)
    assert len(placements) == int((~grid.roads).sum())
    assert all(p.archetype != Archetype.ROAD and p.height is None for p in placements)


def test_draw_order_is_roll_then_height_and_parks_draw_no_height():
    grid = _mixed_grid()
    cfg = CityConfig(width=15, height=15, height_range=(2.0, 3.0))
    placements = resolve_placements(grid, np.random.default_rng(21), cfg)

    replay = np.random.default_rng(21)
    expected = []
    for (x, y), cat in grid.cells():
        if cat == Category.ROAD:
            expected.append((Archetype.ROAD, None))
            continue
        if cat in (Category.MARKET, Category.BUSINESS):
            arch = resolve_mixed_use(cat, float(replay.random()))
        else:
            arch = Archetype(cat.name.lower())
        height = None if arch == Archetype.PARK else float(replay.uniform(2.0, 3.0))
        expected.append((arch, height))
    assert [(p.archetype, p.height) for p in placements] == expected
