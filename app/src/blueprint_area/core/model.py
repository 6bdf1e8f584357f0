from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float


def shoelace_area(points: Sequence[Point]) -> float:
    """Return the absolute area of a polygon using the shoelace formula."""
    if len(points) < 3:
        return 0.0
    area = 0.0
    n = len(points)
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        area += p1.x * p2.y - p2.x * p1.y
    return abs(area) / 2.0


polygon_area = shoelace_area


def polygon_perimeter(points: Sequence[Point]) -> float:
    """Return the perimeter length of a closed polygon."""
    if len(points) < 2:
        return 0.0
    perim = 0.0
    n = len(points)
    for i in range(n):
        p1 = points[i]
        p2 = points[(i + 1) % n]
        perim += math.hypot(p2.x - p1.x, p2.y - p1.y)
    return perim


def pixel_area_to_real_area(pixel_area: float, pixels_per_unit: Optional[float]) -> float:
    """Convert square pixels to square units using a calibrated ratio."""
    if pixels_per_unit is None or not math.isfinite(pixels_per_unit) or pixels_per_unit <= 0:
        raise ValueError(f"pixels_per_unit must be a positive number, got {pixels_per_unit!r}")
    return pixel_area / (pixels_per_unit * pixels_per_unit)


def unit_label(unit: str) -> str:
    if unit == "ft":
        return "ft"
    if unit == "in":
        return "in"
    return "m"


def area_unit_label(unit: str) -> str:
    return f"sq {unit_label(unit)}"


@dataclass
class PolygonRegion:
    points: Tuple[Point, ...] = ()
    closed: bool = False
    area_px: float = 0.0
    perimeter_px: float = 0.0

    def compute_metrics(self) -> None:
        """Recompute area and perimeter in pixel units."""
        self.area_px = shoelace_area(self.points)
        self.perimeter_px = polygon_perimeter(self.points)


@dataclass
class RectangleRegion:
    rect: Rect
    real_width: float
    real_height: float

    @property
    def real_area(self) -> float:
        return self.real_width * self.real_height
