from __future__ import annotations

import math

import pytest

from blueprint_area.core.model import (
    Point,
    PolygonRegion,
    Rect,
    RectangleRegion,
    area_unit_label,
    pixel_area_to_real_area,
    polygon_area,
    polygon_perimeter,
    unit_label,
)


RECT_CORNERS = [Point(0, 0), Point(0, 10), Point(5, 10), Point(5, 0)]
L_SHAPE = [Point(0, 0), Point(40, 0), Point(40, 10), Point(10, 10), Point(10, 30), Point(0, 30)]


def test_polygon_area_of_axis_aligned_rectangle() -> None:
    assert polygon_area(RECT_CORNERS) == 50


def test_polygon_area_of_concave_polygon() -> None:
    # 40x10 bar plus a 10x20 leg
    assert polygon_area(L_SHAPE) == pytest.approx(600)


@pytest.mark.parametrize("points", [RECT_CORNERS, L_SHAPE])
def test_polygon_area_ignores_winding_direction(points) -> None:
    assert polygon_area(list(reversed(points))) == pytest.approx(polygon_area(points))


@pytest.mark.parametrize("shift", [1, 2, 3])
def test_polygon_area_ignores_starting_vertex(shift: int) -> None:
    rotated = L_SHAPE[shift:] + L_SHAPE[:shift]
    assert polygon_area(rotated) == pytest.approx(polygon_area(L_SHAPE))


def test_polygon_area_needs_three_points() -> None:
    assert polygon_area([]) == 0.0
    assert polygon_area([Point(0, 0), Point(10, 10)]) == 0.0


def test_polygon_perimeter_closes_the_loop() -> None:
    assert polygon_perimeter(RECT_CORNERS) == pytest.approx(30)
    assert polygon_perimeter([Point(1, 1)]) == 0.0


@pytest.mark.parametrize("ppu", [0.5, 1.0, 7.25, 120.0])
@pytest.mark.parametrize("k", [1.0, 3.5, 1000.0])
def test_pixel_area_conversion_round_trip(ppu: float, k: float) -> None:
    assert pixel_area_to_real_area(k * ppu ** 2, ppu) == pytest.approx(k)


@pytest.mark.parametrize("ppu", [None, 0, -2.0, math.inf, math.nan])
def test_pixel_area_conversion_requires_positive_scale(ppu) -> None:
    with pytest.raises(ValueError):
        pixel_area_to_real_area(100.0, ppu)


def test_unit_labels() -> None:
    assert unit_label("ft") == "ft"
    assert unit_label("in") == "in"
    assert unit_label("m") == "m"
    assert unit_label("furlong") == "m"
    assert area_unit_label("ft") == "sq ft"
    assert area_unit_label("in") == "sq in"
    assert area_unit_label("m") == "sq m"


def test_polygon_region_metrics() -> None:
    region = PolygonRegion(points=tuple(RECT_CORNERS), closed=True)
    region.compute_metrics()
    assert region.area_px == 50
    assert region.perimeter_px == pytest.approx(30)


def test_rectangle_region_area_uses_real_dimensions_only() -> None:
    region = RectangleRegion(rect=Rect(0, 0, 500, 20), real_width=12, real_height=9.5)
    assert region.real_area == pytest.approx(114)
