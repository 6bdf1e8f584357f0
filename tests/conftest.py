"""
Shared pytest fixtures for the blueprint area tests.

Sessions are built headless: a plain Pillow image stands in for the loaded
blueprint and the canvas is sized to match it, so the fit rectangle is the
whole canvas unless a test says otherwise.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import pytest
from PIL import Image

from blueprint_area.core.model import Point, Rect
from blueprint_area.core.session import Session


class RecordingRenderer:
    """Renderer that records every draw call as ``(name, args)``."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def clear(self) -> None:
        self.calls.append(("clear",))

    def draw_image(self, image, fit: Rect) -> None:
        self.calls.append(("draw_image", image, fit))

    def draw_point(self, p: Point, style: dict) -> None:
        self.calls.append(("draw_point", p))

    def draw_line(self, a: Point, b: Point, style: dict) -> None:
        self.calls.append(("draw_line", a, b))

    def draw_polygon(self, points: Sequence[Point], style: dict) -> None:
        self.calls.append(("draw_polygon", tuple(points)))

    def draw_rectangle(self, rect: Rect, style: dict) -> None:
        self.calls.append(("draw_rectangle", rect))

    def draw_text(self, p: Point, text: str, style: dict) -> None:
        self.calls.append(("draw_text", text))


class FakeDetector:
    """Returns canned points, or raises ``error`` when given."""

    def __init__(self, points: Optional[List[Point]] = None, error: Optional[Exception] = None) -> None:
        self.points = points or []
        self.error = error
        self.calls: List[tuple] = []

    def detect(self, image, seed: Point) -> List[Point]:
        self.calls.append((image.size, seed))
        if self.error is not None:
            raise self.error
        return list(self.points)


@pytest.fixture
def blueprint() -> Image.Image:
    return Image.new("RGB", (800, 600), "white")


@pytest.fixture
def session(blueprint: Image.Image) -> Session:
    s = Session(canvas_width=800, canvas_height=600)
    s.load_image(blueprint)
    s.detector_ready = True
    return s


@pytest.fixture
def calibrated_session(session: Session) -> Session:
    # 10 canvas pixels per unit
    session.pixels_per_unit = 10.0
    session.scale_clicks[:] = [Point(100, 100), Point(200, 100)]
    return session


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def square_room() -> List[Point]:
    # 200 x 100 px room
    return [Point(100, 100), Point(300, 100), Point(300, 200), Point(100, 200)]
