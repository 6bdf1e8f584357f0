from __future__ import annotations

from PIL import Image

from blueprint_area.core.model import Point, PolygonRegion, Rect, RectangleRegion
from blueprint_area.core.session import Mode, Session
from blueprint_area.ui.render import PLACEHOLDER_TEXT, compose_canvas_image, render_session


def test_empty_session_shows_placeholder(renderer) -> None:
    render_session(Session(), renderer)
    assert renderer.calls == [("clear",), ("draw_text", PLACEHOLDER_TEXT)]


def test_full_redraw_order(calibrated_session: Session, renderer, square_room) -> None:
    calibrated_session.region = PolygonRegion(points=tuple(square_room), closed=True)
    calibrated_session.saved_regions.append(RectangleRegion(Rect(5, 5, 40, 40), 1, 1))
    calibrated_session.mode = Mode.DRAGGING
    calibrated_session.drag_start = Point(300, 300)
    calibrated_session.drag_current = Point(250, 320)

    render_session(calibrated_session, renderer)

    assert renderer.names() == [
        "clear", "draw_image",
        "draw_point", "draw_point", "draw_line",
        "draw_polygon",
        "draw_rectangle", "draw_rectangle",
    ]
    assert renderer.calls[-1] == ("draw_rectangle", Rect(250, 300, 50, 20))


def test_open_region_is_not_drawn(session: Session, renderer) -> None:
    session.region = PolygonRegion(points=(Point(0, 0), Point(5, 5), Point(0, 5)), closed=False)
    render_session(session, renderer)
    assert "draw_polygon" not in renderer.names()


def test_single_scale_click_draws_point_only(session: Session, renderer) -> None:
    session.scale_clicks.append(Point(10, 10))
    render_session(session, renderer)
    assert renderer.names().count("draw_point") == 1
    assert "draw_line" not in renderer.names()


def test_compose_canvas_image_places_fit_image() -> None:
    plan = Image.new("RGB", (800, 600), (0, 0, 0))
    surface = compose_canvas_image(plan, Rect(0, 100, 400, 300), 400, 400)
    assert surface.size == (400, 400)
    assert surface.getpixel((200, 50)) == (255, 255, 255)
    assert surface.getpixel((200, 250)) == (0, 0, 0)
