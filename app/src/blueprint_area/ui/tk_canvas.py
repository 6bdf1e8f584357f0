from __future__ import annotations

from typing import Optional, Sequence

from PIL import Image

try:
    import tkinter as tk
    from PIL import ImageTk
except ImportError:  # pragma: no cover
    tk = None  # type: ignore

from ..core.model import Point, Rect


class TkCanvasRenderer:
    """Draws onto a ``tk.Canvas`` whose backing size matches its display size."""

    def __init__(self, canvas: "tk.Canvas") -> None:
        self.canvas = canvas
        self.photo: Optional["ImageTk.PhotoImage"] = None
        self._photo_key: Optional[tuple] = None

    def clear(self) -> None:
        self.canvas.delete("all")

    def draw_image(self, image: Image.Image, fit: Rect) -> None:
        size = (max(1, int(round(fit.w))), max(1, int(round(fit.h))))
        key = (id(image), size)
        # Resizing is slow; reuse the PhotoImage until the image or fit changes
        if self.photo is None or self._photo_key != key:
            try:
                resample = Image.Resampling.LANCZOS
            except AttributeError:
                resample = Image.LANCZOS
            self.photo = ImageTk.PhotoImage(image.resize(size, resample))
            self._photo_key = key
        self.canvas.create_image(fit.x, fit.y, anchor=tk.NW, image=self.photo)

    def draw_point(self, p: Point, style: dict) -> None:
        r = style.get('radius', 4)
        self.canvas.create_oval(p.x - r, p.y - r, p.x + r, p.y + r,
                                fill=style.get('fill', 'orange'), outline='')

    def draw_line(self, a: Point, b: Point, style: dict) -> None:
        self.canvas.create_line(a.x, a.y, b.x, b.y,
                                fill=style.get('fill', 'orange'),
                                width=style.get('width', 2),
                                dash=style.get('dash', ()))

    def draw_polygon(self, points: Sequence[Point], style: dict) -> None:
        if len(points) < 2:
            return
        coords = []
        for p in points:
            coords.extend([p.x, p.y])
        colour = style.get('outline', 'lime')
        if style.get('fill'):
            self.canvas.create_polygon(coords, fill=colour, outline='', stipple='gray12')
        self.canvas.create_polygon(coords, fill='', outline=colour, width=style.get('width', 2))

    def draw_rectangle(self, rect: Rect, style: dict) -> None:
        self.canvas.create_rectangle(rect.x, rect.y, rect.x + rect.w, rect.y + rect.h,
                                     outline=style.get('outline', 'red'),
                                     width=style.get('width', 2),
                                     dash=style.get('dash', ()))

    def draw_text(self, p: Point, text: str, style: dict) -> None:
        self.canvas.create_text(p.x, p.y, text=text, anchor=tk.NW,
                                fill=style.get('fill', 'black'),
                                font=("TkDefaultFont", 12))
