"""3D placement geometry."""
from __future__ import annotations

import pytest

pytest.importorskip("pyvista")

from city_3d import FLAT_HEIGHT, PyVistaConsumer, placement_bounds
from city_partition.models import Archetype, Category, Placement


def test_building_box_sits_on_the_ground():
    p = Placement(3, 4, Category.INDUSTRIAL, Archetype.INDUSTRIAL, 6.0, 0.5, None)
    xmin, xmax, ymin, ymax, zmin, zmax = placement_bounds(p, cell_size=2.0)
    assert zmin == 0.0
    assert zmax == pytest.approx(3.0)
    assert (xmin, xmax) == (pytest.approx(5.5), pytest.approx(6.5))
    assert (ymin, ymax) == (pytest.approx(7.5), pytest.approx(8.5))


def test_road_and_park_are_flat_tiles():
    for cat, arch in ((Category.ROAD, Archetype.ROAD), (Category.PARK, Archetype.PARK)):
        bounds = placement_bounds(Placement(0, 0, cat, arch, None, 1.0, None))
        assert bounds[4] == 0.0
        assert bounds[5] == pytest.approx(FLAT_HEIGHT)


def test_consumer_forwards_placements(monkeypatch):
    seen = {}
    monkeypatch.setattr("city_3d.plot_city_3d",
                        lambda placements, cell_size, title: seen.update(n=len(placements), title=title))
    consumer = PyVistaConsumer(title="City #1")
    consumer.clear()
    consumer.place((Placement(1, 1, Category.PARK, Archetype.PARK, None, 1.0, None),))
    assert seen == {"n": 1, "title": "City #1"}
