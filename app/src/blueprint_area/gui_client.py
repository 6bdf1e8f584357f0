"""
GUI client for the blueprint area tool.

Uses Tkinter to show a loaded floor plan on a canvas and walk the user
through measuring it:

  * Load an image (PNG/JPEG/...) or the first page of a PDF.
  * Set a scale by clicking two points a known real distance apart.
  * Auto-detect a room by clicking once inside it; its outline is traced
    with OpenCV and the area is reported in calibrated units.
  * Or drag rectangles over areas and type in their real width and height;
    each accepted rectangle is kept as a saved selection.
  * Export the detected room and saved selections to CSV.

Requires a desktop session with Tk available.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

try:
    import tkinter as tk
    from tkinter import simpledialog, ttk
except ImportError:
    # When Tkinter is unavailable (e.g. headless environment), set tk to None.
    tk = None  # type: ignore

from .config import DEFAULT_CONFIG, merge_config
from .core import facade
from .core.coords import ViewGeometry, to_canvas_point
from .core.session import Mode, Session
from .ui.tk_canvas import TkCanvasRenderer

logger = logging.getLogger(__name__)

UNITS = ("m", "ft", "in")


class MeasureAppGUI:
    """Main class encapsulating the Tkinter application."""

    def __init__(self, root: "tk.Tk", config: Optional[Dict[str, Any]] = None) -> None:
        self.root = root
        self.root.title("Blueprint Area Tool")
        self.root.geometry("1300x780")
        self.config: Dict[str, Any] = merge_config(DEFAULT_CONFIG, config or {})
        self.session = Session(
            canvas_width=float(self.config['canvas_width']),
            canvas_height=float(self.config['canvas_height']),
        )
        self.detector: Optional[facade.ContourRegionDetector] = None
        self.current_document_path: Optional[str] = None

        main_frame = tk.Frame(root)
        main_frame.pack(fill=tk.BOTH, expand=True)
        self.canvas = tk.Canvas(main_frame, bg='white',
                                width=self.config['canvas_width'],
                                height=self.config['canvas_height'],
                                highlightthickness=0)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.renderer = TkCanvasRenderer(self.canvas)

        side_frame = tk.Frame(main_frame, padx=6)
        side_frame.pack(side=tk.RIGHT, fill=tk.Y)
        tk.Button(side_frame, text="Load Image/PDF", command=self.load_image).pack(fill=tk.X)
        tk.Button(side_frame, text="Load Config", command=self.load_config).pack(fill=tk.X)
        tk.Button(side_frame, text="Save Config", command=self.save_config).pack(fill=tk.X)

        # Real distance + unit used when the second scale point is placed
        dist_frame = tk.Frame(side_frame)
        dist_frame.pack(fill=tk.X, pady=(10, 0))
        tk.Label(dist_frame, text="Real distance:").pack(side=tk.LEFT)
        self.real_distance_var = tk.StringVar(value="")
        tk.Entry(dist_frame, textvariable=self.real_distance_var, width=8).pack(side=tk.LEFT)
        self.unit_var = tk.StringVar(value=self.config['unit'])
        unit_combo = ttk.Combobox(dist_frame, textvariable=self.unit_var, values=UNITS, state="readonly", width=4)
        unit_combo.pack(side=tk.LEFT, padx=(4, 0))
        unit_combo.bind("<<ComboboxSelected>>", self.on_unit_changed)

        tk.Button(side_frame, text="Set Scale (2 clicks)", command=self.set_scale_mode).pack(fill=tk.X)
        self.auto_btn = tk.Button(side_frame, text="Auto Detect Room", command=self.set_auto_mode, state=tk.DISABLED)
        self.auto_btn.pack(fill=tk.X)
        tk.Button(side_frame, text="Draw Rectangle", command=self.set_rectangle_mode).pack(fill=tk.X)
        tk.Button(side_frame, text="Undo Selection", command=self.undo_selection).pack(fill=tk.X)
        tk.Button(side_frame, text="Clear Result", command=self.clear_result).pack(fill=tk.X)
        tk.Button(side_frame, text="Reset", command=self.reset).pack(fill=tk.X)
        tk.Button(side_frame, text="Export CSV", command=self.export_csv).pack(fill=tk.X)

        self.detector_label = tk.Label(side_frame, text="Detector: loading…", anchor="w")
        self.detector_label.pack(fill=tk.X, pady=(10, 0))
        self.scale_label = tk.Label(side_frame, text="Scale: Not set", anchor="w")
        self.scale_label.pack(fill=tk.X)
        self.area_label = tk.Label(side_frame, text="Area: —", anchor="w", font=("TkDefaultFont", 12, "bold"))
        self.area_label.pack(fill=tk.X)
        self.status_label = tk.Label(side_frame, text="", fg='gray', wraplength=240, justify=tk.LEFT, anchor="w")
        self.status_label.pack(fill=tk.X)

        self.canvas.bind("<ButtonPress-1>", self.on_canvas_press)
        self.canvas.bind("<B1-Motion>", self.on_canvas_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_canvas_release)
        self.canvas.bind("<Configure>", self.on_canvas_resize)
        self.root.bind("<Escape>", self.cancel_mode)

        self.session.set_status("Loading detector…")
        self.refresh()
        # Detector readiness is signalled once, after the window is up
        self.root.after_idle(self._init_detector)

    def _init_detector(self) -> None:
        self.detector = facade.ContourRegionDetector(self.config.get('detector'))
        self.session.detector_ready = True
        self.auto_btn.config(state=tk.NORMAL)
        self.detector_label.config(text="Detector: ready")
        if not self.session.has_image:
            self.session.set_status("Detector ready. Upload an image to begin.")
        logger.info("Region detector ready")
        self.refresh()

    # ----- Config -----
    @property
    def unit(self) -> str:
        return self.unit_var.get() or 'm'

    def apply_config(self, cfg: Dict[str, Any]) -> None:
        self.config = merge_config(DEFAULT_CONFIG, cfg)
        self.unit_var.set(self.config['unit'])
        if self.detector is not None:
            self.detector = facade.ContourRegionDetector(self.config.get('detector'))
        self.refresh()

    def on_unit_changed(self, event=None) -> None:
        self.config['unit'] = self.unit
        self.refresh()

    def load_config(self) -> None:
        facade.file_load_config(self)

    def save_config(self) -> None:
        facade.file_save_config(self)

    # ----- Files -----
    def load_image(self) -> None:
        facade.file_load_image(self)

    def load_image_path(self, path: str) -> bool:
        return facade.file_load_image_path(self, path)

    def export_csv(self) -> None:
        facade.export_csv(self)

    # ----- Modes -----
    def set_scale_mode(self) -> None:
        if facade.scale_set_mode(self.session):
            self.canvas.config(cursor="crosshair")
        self.refresh()

    def set_auto_mode(self) -> None:
        if facade.auto_set_mode(self.session):
            self.canvas.config(cursor="crosshair")
        self.refresh()

    def set_rectangle_mode(self) -> None:
        if facade.rect_set_mode(self.session):
            self.canvas.config(cursor="tcross")
        self.refresh()

    def cancel_mode(self, event=None) -> None:
        if self.session.mode is Mode.SCALE:
            facade.scale_cancel_mode(self.session)
        elif self.session.mode in (Mode.AUTO_SEED, Mode.RECTANGLE, Mode.DRAGGING):
            self.session.mode = Mode.NONE
            self.session.drag_start = None
            self.session.drag_current = None
            self.session.set_status("Cancelled.")
        self.canvas.config(cursor="")
        self.refresh()

    def undo_selection(self) -> None:
        facade.drag_undo(self.session)
        self.refresh()

    def clear_result(self) -> None:
        self.session.clear_current_result()
        self.refresh()

    def reset(self) -> None:
        self.session.reset(keep_image=self.session.has_image)
        self.canvas.config(cursor="")
        self.refresh()

    # ----- Canvas events -----
    def _view(self) -> ViewGeometry:
        return ViewGeometry(
            0, 0,
            max(self.canvas.winfo_width(), 1), max(self.canvas.winfo_height(), 1),
            self.session.canvas_width, self.session.canvas_height,
        )

    def on_canvas_resize(self, event) -> None:
        self.session.set_canvas_size(max(event.width, 1), max(event.height, 1))
        self.refresh()

    def on_canvas_press(self, event) -> None:
        if not self.session.has_image:
            return
        point = to_canvas_point(event, self._view())
        if facade.scale_on_canvas_click(self.session, point, self.real_distance_var.get):
            if self.session.mode is not Mode.SCALE:
                self.canvas.config(cursor="")
        elif self.session.mode is Mode.AUTO_SEED:
            self.canvas.config(cursor="watch")
            self.refresh()
            self.root.update_idletasks()
            facade.auto_on_canvas_click(self.session, point, self.detector, self.unit)
            self.canvas.config(cursor="")
        else:
            facade.drag_start(self.session, point)
        self.refresh()

    def on_canvas_drag(self, event) -> None:
        if facade.drag_move(self.session, to_canvas_point(event, self._view())):
            self.refresh()

    def on_canvas_release(self, event) -> None:
        if self.session.mode is not Mode.DRAGGING:
            return
        point = to_canvas_point(event, self._view())
        facade.drag_end(
            self.session, point, self._prompt_dimensions,
            unit=self.config.get('rect_unit', 'ft'),
            min_size=float(self.config.get('min_selection_px', 10)),
        )
        self.refresh()

    def _prompt_dimensions(self) -> Optional[Tuple[str, str]]:
        """Ask for the real width and height of the dragged rectangle."""
        unit = self.config.get('rect_unit', 'ft')

        class DimensionDialog(simpledialog.Dialog):
            def body(self, master):  # type: ignore[override]
                tk.Label(master, text=f"Width ({unit}):").grid(row=0, column=0, sticky="e", padx=6, pady=4)
                tk.Label(master, text=f"Height ({unit}):").grid(row=1, column=0, sticky="e", padx=6, pady=4)
                self.w_var = tk.StringVar()
                self.h_var = tk.StringVar()
                self.w_entry = tk.Entry(master, textvariable=self.w_var, width=10)
                self.h_entry = tk.Entry(master, textvariable=self.h_var, width=10)
                self.w_entry.grid(row=0, column=1, padx=6, pady=4)
                self.h_entry.grid(row=1, column=1, padx=6, pady=4)
                return self.w_entry

            def apply(self) -> None:  # type: ignore[override]
                self.result = (self.w_var.get(), self.h_var.get())

        dlg = DimensionDialog(self.root, title="Selection Size")
        return getattr(dlg, "result", None)

    # ----- Drawing and Display -----
    def refresh(self) -> None:
        """Full redraw plus scale/area/status labels."""
        facade.render_session(self.session, self.renderer)
        self.scale_label.config(text=f"Scale: {facade.scale_summary(self.session, self.unit)}")
        self.area_label.config(text=f"Area: {self.session.area_text}")
        self.status_label.config(text=f"Status: {self.session.status}")


def main(config: Optional[Dict[str, Any]] = None, image_path: Optional[str] = None) -> None:
    if tk is None:
        raise RuntimeError("Tkinter is not available in this environment. Please run this on a system with a graphical desktop and Tk installed.")
    root = tk.Tk()
    app = MeasureAppGUI(root, config)
    if image_path:
        root.after_idle(lambda: app.load_image_path(image_path))
    root.mainloop()
