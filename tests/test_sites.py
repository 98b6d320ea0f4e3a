"""Site set generation."""
from __future__ import annotations

import numpy as np

from city_partition.models import Category, CityConfig, DISTRICT_CATEGORIES
from city_partition.sites import draw_site_count, generate_sites, sites_from_config


def test_sites_within_bounds_and_categories():
    rng = np.random.default_rng(0)
    sites = generate_sites(rng, 7, 3, 200)
    assert len(sites) == 200
    for s in sites:
        assert 0 <= s.x < 7 and 0 <= s.y < 3
        assert s.category in DISTRICT_CATEGORIES
        assert s.category != Category.ROAD


def test_draw_order_is_x_y_category_per_site():
    cats = (Category.RESIDENTIAL, Category.INDUSTRIAL, Category.MARKET)
    sites = generate_sites(np.random.default_rng(9), 50, 40, 5, cats)

    rng = np.random.default_rng(9)
    expected = []
    for _ in range(5):
        x = int(rng.integers(0, 50))
        y = int(rng.integers(0, 40))
        expected.append((x, y, cats[int(rng.integers(0, 3))]))
    assert [(s.x, s.y, s.category) for s in sites] == expected


def test_same_seed_same_sites():
    a = generate_sites(np.random.default_rng(42), 30, 30, 10)
    b = generate_sites(np.random.default_rng(42), 30, 30, 10)
    assert a == b


def test_site_count_fixed_ranged_and_degenerate():
    rng = np.random.default_rng(1)
    assert draw_site_count(rng, 6, 1, 2) == 6
    counts = {draw_site_count(rng, None, 3, 6) for _ in range(300)}
    assert counts == {3, 4, 5}

    state = rng.bit_generator.state
    assert draw_site_count(rng, None, 4, 4) == 4
    assert rng.bit_generator.state == state


def test_restricted_category_set():
    cfg = CityConfig(width=10, height=10, site_count=40,
                     site_categories=("residential", "industrial"))
    sites = sites_from_config(np.random.default_rng(5), cfg)
    assert len(sites) == 40
    assert {s.category for s in sites} <= {Category.RESIDENTIAL, Category.INDUSTRIAL}
