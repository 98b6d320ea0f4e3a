"""Block road lattice."""
from __future__ import annotations

import numpy as np
import pytest

from city_partition.lattice import carve_block_roads, lattice_mask
from city_partition.models import Category, Site
from city_partition.partition import partition_grid


def test_lattice_mask_lines():
    mask = lattice_mask(10, 10, 5)
    for x in range(10):
        for y in range(10):
            assert mask[x, y] == (x in (0, 5) or y in (0, 5))


def test_lattice_rejects_bad_block_size():
    with pytest.raises(ValueError):
        lattice_mask(4, 4, 0)


def test_carve_sets_lattice_roads_and_keeps_districts():
    grid = partition_grid(10, 10, [Site(3, 3, Category.RESIDENTIAL)])
    carved = carve_block_roads(grid, 5)
    np.testing.assert_array_equal(carved.roads, lattice_mask(10, 10, 5))
    assert np.all(carved.categories[~carved.roads] == Category.RESIDENTIAL)
    np.testing.assert_array_equal(carved.districts, grid.districts)
    # input grid untouched
    assert not grid.roads.any()


def test_park_is_never_bisected():
    grid = partition_grid(12, 12, [Site(6, 6, Category.PARK)])
    carved = carve_block_roads(grid, 3)
    assert np.all(carved.categories == Category.PARK)


def test_park_border_roads_survive_and_other_districts_are_carved():
    grid = partition_grid(10, 10, [Site(1, 5, Category.PARK), Site(8, 5, Category.MARKET)])
    carved = carve_block_roads(grid, 4)
    assert carved.roads[5, :].all()
    for x in range(5):
        assert carved.categories[x, 4] == Category.PARK
    assert carved.categories[8, 4] == Category.ROAD
    assert carved.categories[8, 0] == Category.ROAD


def test_carving_is_idempotent_and_monotonic():
    rng = np.random.default_rng(8)
    sites = [Site(int(rng.integers(0, 30)), int(rng.integers(0, 30)), Category(int(rng.integers(1, 6))))
             for _ in range(9)]
    grid = partition_grid(30, 30, sites)
    once = carve_block_roads(grid, 6)
    twice = carve_block_roads(once, 6)
    np.testing.assert_array_equal(once.categories, twice.categories)
    assert not (grid.roads & ~once.roads).any()
