"""
OpenCV room-outline detector.

Given the rendered blueprint and a seed click, finds the closed outline that
contains the seed: grayscale, blur, Canny edges, a morphological close to
bridge small gaps in wall lines, then external contours.  Small contours are
treated as noise; of the remaining ones that contain the seed, the one with
the largest area wins and is simplified to a polygon.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import cv2
import numpy as np
from PIL import Image

from ...config import DEFAULT_CONFIG
from ...core.errors import RegionDegenerate, RegionNotFound
from ...core.model import Point

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _scratch() -> Iterator[Dict[str, Any]]:
    """Hold intermediate images for one detection and drop them on exit."""
    buffers: Dict[str, Any] = {}
    try:
        yield buffers
    finally:
        buffers.clear()


def pick_largest_containing(
    contours: Sequence[np.ndarray], seed: Point, min_area: float
) -> Optional[np.ndarray]:
    """Return the largest contour (by area) that contains ``seed``.

    Contours smaller than ``min_area`` are ignored; a seed on the boundary
    counts as inside.
    """
    best = None
    best_area = 0.0
    seed_pt = (float(seed.x), float(seed.y))
    for cnt in contours:
        area = cv2.contourArea(cnt)
        if area < min_area:
            continue
        if cv2.pointPolygonTest(cnt, seed_pt, False) >= 0 and area > best_area:
            best = cnt
            best_area = area
    return best


class ContourRegionDetector:
    def __init__(self, settings: Optional[Mapping[str, Any]] = None) -> None:
        cfg = dict(DEFAULT_CONFIG['detector'])
        if settings:
            cfg.update(settings)
        self.blur_kernel = int(cfg['blur_kernel'])
        self.canny_low = float(cfg['canny_low'])
        self.canny_high = float(cfg['canny_high'])
        self.close_kernel = int(cfg['close_kernel'])
        self.min_contour_area = float(cfg['min_contour_area'])
        self.approx_epsilon = float(cfg['approx_epsilon'])

    def find_contours(self, image: Image.Image) -> List[np.ndarray]:
        with _scratch() as mats:
            mats['src'] = np.array(image.convert('RGB'))
            mats['gray'] = cv2.cvtColor(mats['src'], cv2.COLOR_RGB2GRAY)
            k = self.blur_kernel
            mats['blur'] = cv2.GaussianBlur(mats['gray'], (k, k), 0)
            mats['edges'] = cv2.Canny(mats['blur'], self.canny_low, self.canny_high)
            ck = self.close_kernel
            mats['kernel'] = cv2.getStructuringElement(cv2.MORPH_RECT, (ck, ck))
            mats['closed'] = cv2.morphologyEx(mats['edges'], cv2.MORPH_CLOSE, mats['kernel'])
            contours, _hierarchy = cv2.findContours(
                mats['closed'], cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
            )
        return list(contours)

    def detect(self, image: Image.Image, seed: Point) -> List[Point]:
        contours = self.find_contours(image)
        best = pick_largest_containing(contours, seed, self.min_contour_area)
        if best is None:
            logger.debug("No contour of %d contains %s", len(contours), seed)
            raise RegionNotFound()
        epsilon = self.approx_epsilon * cv2.arcLength(best, True)
        approx = cv2.approxPolyDP(best, epsilon, True)
        points = [Point(float(x), float(y)) for x, y in approx.reshape(-1, 2)]
        if len(points) < 3:
            raise RegionDegenerate()
        logger.debug("Detected %d-vertex outline around %s", len(points), seed)
        return points
