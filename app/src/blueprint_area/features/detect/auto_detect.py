from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from PIL import Image

from ...core.coords import is_inside_image
from ...core.errors import (
    CalibrationRequired,
    DetectorFailure,
    DetectorNotReady,
    InvalidClickLocation,
    MeasureError,
    NoImageLoaded,
    RegionDegenerate,
)
from ...core.model import Point, PolygonRegion, area_unit_label, pixel_area_to_real_area
from ...core.session import Mode, NO_AREA, Session
from ...ui.render import compose_canvas_image

logger = logging.getLogger(__name__)


class RegionDetector(Protocol):
    def detect(self, image: Image.Image, seed: Point) -> List[Point]:
        """Return the outline containing ``seed`` or raise RegionNotFound/RegionDegenerate."""
        ...


def set_auto_mode(session: Session) -> bool:
    try:
        if not session.detector_ready:
            raise DetectorNotReady()
        if not session.has_image:
            raise NoImageLoaded()
        if not session.is_calibrated:
            raise CalibrationRequired()
    except MeasureError as err:
        session.fail(err)
        return False
    session.mode = Mode.AUTO_SEED
    session.set_status("Auto-detect: click once INSIDE the room you want to measure.")
    return True


def auto_on_canvas_click(session: Session, point: Point, detector: RegionDetector, unit: str) -> bool:
    """Handle a seed click in auto-detect mode. Return True if handled."""
    if session.mode is not Mode.AUTO_SEED:
        return False
    if session.fit is None or not is_inside_image(point, session.fit):
        session.fail(InvalidClickLocation())
        return True
    session.mode = Mode.NONE
    acquire_by_seed(session, point, detector, unit)
    return True


def acquire_by_seed(
    session: Session, seed: Point, detector: RegionDetector, unit: str
) -> Optional[PolygonRegion]:
    """Ask the detector for the room around ``seed`` and report its real area."""
    if session.image is None or session.fit is None:
        session.fail(NoImageLoaded())
        return None
    if not session.is_calibrated:
        session.fail(CalibrationRequired())
        return None

    session.set_status("Detecting room outline…")
    surface = compose_canvas_image(session.image, session.fit, session.canvas_width, session.canvas_height)
    try:
        points = detector.detect(surface, seed)
        if len(points) < 3:
            raise RegionDegenerate()
    except MeasureError as err:
        _drop_region(session)
        session.fail(err)
        return None
    except Exception:
        logger.exception("Region detector crashed for seed %s", seed)
        _drop_region(session)
        session.fail(DetectorFailure())
        return None

    region = PolygonRegion(points=tuple(points), closed=True)
    region.compute_metrics()
    real_area = pixel_area_to_real_area(region.area_px, session.pixels_per_unit)
    session.region = region
    session.last_area = real_area
    session.area_text = f"{real_area:.2f} {area_unit_label(unit)}"
    session.last_error = None
    logger.info("Detected room: %d vertices, %.1f px², %s", len(points), region.area_px, session.area_text)
    session.set_status("Auto-detect complete. If it grabbed the wrong region, click Auto Detect and try again.")
    return region


def _drop_region(session: Session) -> None:
    session.region = None
    session.last_area = None
    session.area_text = NO_AREA
