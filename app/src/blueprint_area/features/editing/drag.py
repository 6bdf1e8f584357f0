from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from ...core.coords import is_inside_image
from ...core.errors import (
    InvalidClickLocation,
    InvalidRealDimensions,
    MeasureError,
    NoImageLoaded,
    SelectionTooSmall,
    parse_positive_number,
)
from ...core.model import Point, Rect, RectangleRegion, area_unit_label
from ...core.session import Mode, NO_AREA, Session

logger = logging.getLogger(__name__)

MIN_SELECTION_PX: float = 10

DimensionPrompt = Callable[[], Optional[Tuple[object, object]]]


def normalize_rect(a: Point, b: Point) -> Rect:
    """Axis-aligned rectangle spanned by two corners, whatever the drag direction."""
    return Rect(min(a.x, b.x), min(a.y, b.y), abs(b.x - a.x), abs(b.y - a.y))


def set_rectangle_mode(session: Session) -> bool:
    if not session.has_image:
        session.fail(NoImageLoaded())
        return False
    session.mode = Mode.RECTANGLE
    session.drag_start = None
    session.drag_current = None
    session.set_status("Rectangle mode: drag a box over the area to measure.")
    return True


def on_drag_start(session: Session, point: Point) -> bool:
    if session.mode is not Mode.RECTANGLE:
        return False
    if session.fit is None or not is_inside_image(point, session.fit):
        session.fail(InvalidClickLocation())
        return True
    session.drag_start = point
    session.drag_current = point
    session.mode = Mode.DRAGGING
    return True


def on_drag_move(session: Session, point: Point) -> bool:
    if session.mode is not Mode.DRAGGING:
        return False
    session.drag_current = point
    return True


def on_drag_end(
    session: Session,
    point: Point,
    prompt_dimensions: DimensionPrompt,
    unit: str = 'ft',
    min_size: float = MIN_SELECTION_PX,
) -> Optional[RectangleRegion]:
    """Finish a drag; keep the box only if it is large enough and gets real dimensions."""
    if session.mode is not Mode.DRAGGING or session.drag_start is None:
        return None
    rect = normalize_rect(session.drag_start, point)
    session.drag_start = None
    session.drag_current = None
    session.mode = Mode.RECTANGLE
    try:
        if rect.w < min_size or rect.h < min_size:
            raise SelectionTooSmall()
        answer = prompt_dimensions()
        if answer is None:
            raise InvalidRealDimensions()
        raw_w, raw_h = answer
        width = parse_positive_number(raw_w, InvalidRealDimensions)
        height = parse_positive_number(raw_h, InvalidRealDimensions)
    except MeasureError as err:
        session.fail(err)
        return None

    region = RectangleRegion(rect=rect, real_width=width, real_height=height)
    session.saved_regions.append(region)
    session.last_area = region.real_area
    session.area_text = f"{region.real_area:.2f} {area_unit_label(unit)}"
    session.last_error = None
    logger.info("Saved selection #%d: %s -> %s", len(session.saved_regions), rect, session.area_text)
    session.set_status(f"Selection {len(session.saved_regions)} saved. Drag another box or reset.")
    return region


def undo_last_selection(session: Session) -> Optional[RectangleRegion]:
    if not session.saved_regions:
        session.set_status("No saved selections to undo.")
        return None
    removed = session.saved_regions.pop()
    session.last_area = None
    session.area_text = NO_AREA
    session.set_status(f"Removed selection {len(session.saved_regions) + 1}.")
    return removed
