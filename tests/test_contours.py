from __future__ import annotations

import contextlib

import cv2
import numpy as np
import pytest
from PIL import Image

from blueprint_area.core.errors import DetectorFailure, RegionNotFound
from blueprint_area.core.model import Point, polygon_area
from blueprint_area.core.session import Session
from blueprint_area.features.detect import contours as contours_mod
from blueprint_area.features.detect.auto_detect import acquire_by_seed
from blueprint_area.features.detect.contours import ContourRegionDetector, pick_largest_containing


def _box(x: int, y: int, w: int, h: int) -> np.ndarray:
    return np.array([[[x, y]], [[x + w, y]], [[x + w, y + h]], [[x, y + h]]], dtype=np.int32)


def _plan(*rooms, size=(400, 300), thickness=3) -> Image.Image:
    w, h = size
    canvas = np.full((h, w, 3), 255, dtype=np.uint8)
    for (x0, y0, x1, y1) in rooms:
        cv2.rectangle(canvas, (x0, y0), (x1, y1), (0, 0, 0), thickness)
    return Image.fromarray(canvas)


def test_overlapping_contours_pick_largest_containing_seed() -> None:
    small = _box(0, 0, 50, 100)   # 5000 px²
    large = _box(0, 0, 90, 100)   # 9000 px²
    best = pick_largest_containing([small, large], Point(25, 50), min_area=2000)
    assert best is large
    best = pick_largest_containing([large, small], Point(25, 50), min_area=2000)
    assert best is large


def test_contours_below_noise_threshold_are_ignored() -> None:
    tiny = _box(0, 0, 40, 40)  # 1600 px²
    assert pick_largest_containing([tiny], Point(20, 20), min_area=2000) is None


def test_seed_outside_every_contour() -> None:
    assert pick_largest_containing([_box(0, 0, 90, 100)], Point(200, 200), min_area=2000) is None


def test_seed_on_boundary_counts_as_inside() -> None:
    room = _box(0, 0, 90, 100)
    assert pick_largest_containing([room], Point(0, 50), min_area=2000) is room


def test_detects_rectangular_room() -> None:
    points = ContourRegionDetector().detect(_plan((50, 50, 250, 200)), Point(150, 125))
    assert 4 <= len(points) <= 6
    assert polygon_area(points) == pytest.approx(30000, rel=0.12)
    xs = sorted(p.x for p in points)
    assert xs[0] == pytest.approx(50, abs=6)
    assert xs[-1] == pytest.approx(250, abs=6)


def test_blank_image_has_no_region() -> None:
    with pytest.raises(RegionNotFound):
        ContourRegionDetector().detect(Image.new("RGB", (400, 300), "white"), Point(200, 150))


def test_seed_outside_drawn_room() -> None:
    with pytest.raises(RegionNotFound):
        ContourRegionDetector().detect(_plan((50, 50, 200, 150)), Point(350, 250))


def test_settings_override_noise_threshold() -> None:
    plan = _plan((50, 50, 100, 100))  # about 2500 px²
    seed = Point(75, 75)
    assert len(ContourRegionDetector().detect(plan, seed)) >= 3
    with pytest.raises(RegionNotFound):
        ContourRegionDetector({"min_contour_area": 10000}).detect(plan, seed)


def test_scratch_buffers_released_when_opencv_fails(monkeypatch) -> None:
    seen = []
    real_scratch = contours_mod._scratch

    @contextlib.contextmanager
    def watched():
        with real_scratch() as mats:
            seen.append(mats)
            yield mats

    monkeypatch.setattr(contours_mod, "_scratch", watched)
    # Gaussian kernels must be odd, so OpenCV rejects this one mid-pipeline
    detector = ContourRegionDetector({"blur_kernel": 4})
    with pytest.raises(cv2.error):
        detector.detect(_plan((50, 50, 250, 200)), Point(150, 125))
    assert len(seen) == 1
    assert seen[0] == {}


def test_failed_detection_surfaces_as_detector_failure(monkeypatch) -> None:
    seen = []
    real_scratch = contours_mod._scratch

    @contextlib.contextmanager
    def watched():
        with real_scratch() as mats:
            seen.append(mats)
            yield mats

    monkeypatch.setattr(contours_mod, "_scratch", watched)
    s = Session(canvas_width=400, canvas_height=300, detector_ready=True)
    s.load_image(_plan((50, 50, 250, 200)))
    s.pixels_per_unit = 10.0

    assert acquire_by_seed(s, Point(150, 125), ContourRegionDetector({"blur_kernel": 4}), "m") is None
    assert isinstance(s.last_error, DetectorFailure)
    assert s.region is None
    assert seen == [{}]
