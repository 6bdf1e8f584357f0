from __future__ import annotations

import logging
from typing import Callable

from ...core.coords import distance, is_inside_image
from ...core.errors import (
    InvalidCalibrationInput,
    InvalidClickLocation,
    MeasureError,
    NoImageLoaded,
    parse_positive_number,
)
from ...core.model import Point, unit_label
from ...core.session import Mode, Session

logger = logging.getLogger(__name__)


def set_scale_mode(session: Session) -> bool:
    """Start a fresh two-click calibration; any previous scale is discarded."""
    if not session.has_image:
        session.fail(NoImageLoaded())
        return False
    session.mode = Mode.SCALE
    session.scale_clicks.clear()
    session.pixels_per_unit = None
    session.drag_start = None
    session.drag_current = None
    session.set_status("Scale mode: click 2 points with a known real distance between them.")
    return True


def cancel_scale_mode(session: Session) -> None:
    if session.mode is not Mode.SCALE:
        return
    if len(session.scale_clicks) < 2:
        session.scale_clicks.clear()
    session.mode = Mode.NONE
    session.set_status("Scale mode cancelled.")


def scale_on_canvas_click(session: Session, point: Point, read_distance: Callable[[], object]) -> bool:
    """Handle a click in scale mode. Return True if handled.

    ``read_distance`` is only called once the second point is placed and
    should return whatever the user typed as the real distance.
    """
    if session.mode is not Mode.SCALE:
        return False
    if session.fit is None or not is_inside_image(point, session.fit):
        session.fail(InvalidClickLocation())
        return True
    if len(session.scale_clicks) >= 2:
        session.scale_clicks.clear()
    session.scale_clicks.append(point)
    if len(session.scale_clicks) == 1:
        session.set_status("Scale mode: click the second point.")
        return True

    p0, p1 = session.scale_clicks
    try:
        pixel_dist = distance(p0, p1)
        if pixel_dist == 0:
            raise InvalidCalibrationInput("Select two distinct points to set the scale.")
        real_dist = parse_positive_number(read_distance(), InvalidCalibrationInput)
    except MeasureError as err:
        session.scale_clicks.clear()
        session.pixels_per_unit = None
        session.fail(err)
        return True

    session.pixels_per_unit = pixel_dist / real_dist
    session.mode = Mode.NONE
    logger.info(
        "Scale set: %.2f px over %.4f units -> %.4f px/unit",
        pixel_dist, real_dist, session.pixels_per_unit,
    )
    session.set_status("Scale set. Now click Auto Detect Room, then click inside the room.")
    return True


def scale_summary(session: Session, unit: str) -> str:
    if not session.pixels_per_unit:
        return "Not set"
    u = unit_label(unit)
    unit_per_pixel = 1 / session.pixels_per_unit
    return f"{session.pixels_per_unit:.4f} px/{u} (={unit_per_pixel:.6f} {u}/px)"
