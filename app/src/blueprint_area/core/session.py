from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from .coords import fit_rect
from .errors import MeasureError
from .model import Point, PolygonRegion, Rect, RectangleRegion

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

READY_STATUS = "Ready. Set scale, then auto-detect."
EMPTY_STATUS = "Upload an image to begin."
NO_AREA = "—"


class Mode(enum.Enum):
    NONE = "none"
    SCALE = "scale"
    AUTO_SEED = "auto_seed"
    RECTANGLE = "rectangle"
    DRAGGING = "dragging"


@dataclass
class Session:
    """All mutable measuring state for one loaded blueprint."""

    canvas_width: float = 1000.0
    canvas_height: float = 700.0
    image: Optional["Image.Image"] = None
    fit: Optional[Rect] = None
    mode: Mode = Mode.NONE
    # Scale calibration
    scale_clicks: List[Point] = field(default_factory=list)
    pixels_per_unit: Optional[float] = None
    # Detected polygon
    region: Optional[PolygonRegion] = None
    # Rectangle selections
    drag_start: Optional[Point] = None
    drag_current: Optional[Point] = None
    saved_regions: List[RectangleRegion] = field(default_factory=list)
    # Outputs
    status: str = EMPTY_STATUS
    area_text: str = NO_AREA
    last_area: Optional[float] = None
    last_error: Optional[MeasureError] = None
    detector_ready: bool = False

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def is_calibrated(self) -> bool:
        return self.pixels_per_unit is not None

    def set_status(self, msg: str) -> None:
        self.status = msg

    def fail(self, error: MeasureError) -> None:
        self.last_error = error
        self.set_status(error.message)
        logger.info("%s: %s", type(error).__name__, error.message)

    def set_canvas_size(self, width: float, height: float) -> None:
        """Resize the canvas; stored geometry and the scale follow the refit image."""
        old_fit = self.fit
        self.canvas_width = float(width)
        self.canvas_height = float(height)
        self._refit()
        if old_fit is not None and self.fit is not None and old_fit.w > 0 and old_fit != self.fit:
            self._rescale(old_fit, self.fit)

    def _rescale(self, old: Rect, new: Rect) -> None:
        # Aspect ratio is preserved by the fit, so one factor covers both axes
        s = new.w / old.w

        def move(p: Point) -> Point:
            return Point(new.x + (p.x - old.x) * s, new.y + (p.y - old.y) * s)

        self.scale_clicks[:] = [move(p) for p in self.scale_clicks]
        if self.pixels_per_unit is not None:
            self.pixels_per_unit *= s
        if self.region is not None:
            self.region.points = tuple(move(p) for p in self.region.points)
            self.region.compute_metrics()
        if self.drag_start is not None:
            self.drag_start = move(self.drag_start)
        if self.drag_current is not None:
            self.drag_current = move(self.drag_current)
        for saved in self.saved_regions:
            corner = move(Point(saved.rect.x, saved.rect.y))
            saved.rect = Rect(corner.x, corner.y, saved.rect.w * s, saved.rect.h * s)
        logger.debug("Canvas refit %s -> %s (x%.4f)", old, new, s)

    def _refit(self) -> None:
        if self.image is None:
            self.fit = None
            return
        w, h = self.image.size
        self.fit = fit_rect(w, h, self.canvas_width, self.canvas_height)

    def load_image(self, image: "Image.Image") -> None:
        self.image = image
        self._refit()
        self.reset(keep_image=True)
        self.set_status("Image loaded. Click Set Scale (2 clicks).")
        logger.info("Loaded image %dx%d, fit=%s", image.width, image.height, self.fit)

    def clear_current_result(self) -> None:
        self.region = None
        self.area_text = NO_AREA
        self.last_area = None
        self.set_status("Cleared detected result.")

    def reset(self, keep_image: bool = True) -> None:
        self.scale_clicks.clear()
        self.pixels_per_unit = None
        self.clear_current_result()
        self.drag_start = None
        self.drag_current = None
        self.saved_regions.clear()
        self.last_error = None
        self.mode = Mode.NONE
        if not keep_image:
            self.image = None
            self.fit = None
        self.set_status(READY_STATUS if keep_image else EMPTY_STATUS)
