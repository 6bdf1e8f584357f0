from __future__ import annotations

import math
from dataclasses import dataclass

from .model import Point, Rect


@dataclass(frozen=True)
class ViewGeometry:
    """Where the canvas sits on screen and how large its backing surface is."""

    left: float
    top: float
    display_width: float
    display_height: float
    canvas_width: float
    canvas_height: float


def to_canvas_point(event, view: ViewGeometry) -> Point:
    """Map a pointer event (anything with ``x``/``y``) into canvas space."""
    sx = view.canvas_width / view.display_width if view.display_width else 1.0
    sy = view.canvas_height / view.display_height if view.display_height else 1.0
    return Point((event.x - view.left) * sx, (event.y - view.top) * sy)


def is_inside_image(point: Point, fit: Rect) -> bool:
    return fit.x <= point.x <= fit.x + fit.w and fit.y <= point.y <= fit.y + fit.h


def fit_rect(img_w: float, img_h: float, box_w: float, box_h: float) -> Rect:
    """Largest centred rectangle with the image's aspect ratio inside the box."""
    img_ratio = img_w / img_h
    box_ratio = box_w / box_h
    if img_ratio > box_ratio:
        w = box_w
        h = w / img_ratio
    else:
        h = box_h
        w = h * img_ratio
    return Rect((box_w - w) / 2, (box_h - h) / 2, w, h)


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)
