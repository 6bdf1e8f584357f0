from __future__ import annotations

from typing import Optional, Protocol, Sequence

from PIL import Image

from ..core.model import Point, Rect
from ..core.session import Mode, Session
from ..features.editing.drag import normalize_rect

# ---------- Visual Style Configuration ----------
# Scale reference points and line
SCALE_COLOR: str = 'orange'
SCALE_POINT_RADIUS: int = 4
SCALE_LINE_WIDTH: int = 2
SCALE_LINE_DASH: tuple[int, int] = (6, 4)

# Detected room outline
REGION_COLOR: str = 'lime'
REGION_LINE_WIDTH: int = 2

# Saved and in-progress rectangle selections
SAVED_RECT_COLOR: str = '#1e90ff'
DRAG_RECT_COLOR: str = 'red'
DRAG_RECT_DASH: tuple[int, int] = (4, 4)

PLACEHOLDER_TEXT: str = "Upload an image to begin."
PLACEHOLDER_COLOR: str = '#666'
CANVAS_BACKGROUND: str = 'white'


class Renderer(Protocol):
    def clear(self) -> None: ...

    def draw_image(self, image: Image.Image, fit: Rect) -> None: ...

    def draw_point(self, p: Point, style: dict) -> None: ...

    def draw_line(self, a: Point, b: Point, style: dict) -> None: ...

    def draw_polygon(self, points: Sequence[Point], style: dict) -> None: ...

    def draw_rectangle(self, rect: Rect, style: dict) -> None: ...

    def draw_text(self, p: Point, text: str, style: dict) -> None: ...


def compose_canvas_image(image: Image.Image, fit: Rect, canvas_w: float, canvas_h: float) -> Image.Image:
    """Return the canvas surface as drawn: the image fit into a blank canvas."""
    surface = Image.new('RGB', (max(1, int(round(canvas_w))), max(1, int(round(canvas_h)))), CANVAS_BACKGROUND)
    size = (max(1, int(round(fit.w))), max(1, int(round(fit.h))))
    try:
        resample = Image.Resampling.LANCZOS
    except AttributeError:
        resample = Image.LANCZOS
    fitted = image.convert('RGB').resize(size, resample)
    surface.paste(fitted, (int(round(fit.x)), int(round(fit.y))))
    return surface


def current_drag_rect(session: Session) -> Optional[Rect]:
    if session.mode is not Mode.DRAGGING or session.drag_start is None or session.drag_current is None:
        return None
    return normalize_rect(session.drag_start, session.drag_current)


def render_session(session: Session, renderer: Renderer) -> None:
    """Clear and redraw everything the session shows."""
    renderer.clear()
    if session.image is None or session.fit is None:
        renderer.draw_text(Point(20, 30), PLACEHOLDER_TEXT, {'fill': PLACEHOLDER_COLOR})
        return
    renderer.draw_image(session.image, session.fit)

    scale_style = {'fill': SCALE_COLOR, 'radius': SCALE_POINT_RADIUS,
                   'width': SCALE_LINE_WIDTH, 'dash': SCALE_LINE_DASH}
    for p in session.scale_clicks:
        renderer.draw_point(p, scale_style)
    if len(session.scale_clicks) == 2:
        renderer.draw_line(session.scale_clicks[0], session.scale_clicks[1], scale_style)

    region = session.region
    if region is not None and region.closed and len(region.points) >= 3:
        renderer.draw_polygon(region.points, {'outline': REGION_COLOR, 'width': REGION_LINE_WIDTH, 'fill': True})

    for saved in session.saved_regions:
        renderer.draw_rectangle(saved.rect, {'outline': SAVED_RECT_COLOR, 'width': 2})

    drag = current_drag_rect(session)
    if drag is not None:
        renderer.draw_rectangle(drag, {'outline': DRAG_RECT_COLOR, 'width': 2, 'dash': DRAG_RECT_DASH})
