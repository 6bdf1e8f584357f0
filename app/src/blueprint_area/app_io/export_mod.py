from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Union

try:
    from tkinter import filedialog, messagebox
except Exception:  # pragma: no cover
    filedialog = None  # type: ignore
    messagebox = None  # type: ignore

from ..core.model import area_unit_label, pixel_area_to_real_area
from ..core.session import Session

if TYPE_CHECKING:
    from ..gui_client import MeasureAppGUI

logger = logging.getLogger(__name__)

CSV_HEADER = [
    'kind', 'index', 'pixel_area', 'real_area', 'unit',
    'x', 'y', 'width', 'height', 'real_width', 'real_height', 'real_perimeter',
]


def measurement_rows(session: Session, unit: str = 'm', rect_unit: str = 'ft') -> List[list]:
    rows: List[list] = []
    region = session.region
    if region is not None and region.closed and session.pixels_per_unit:
        xs = [p.x for p in region.points]
        ys = [p.y for p in region.points]
        rows.append([
            'room', 1, round(region.area_px, 2),
            round(pixel_area_to_real_area(region.area_px, session.pixels_per_unit), 4),
            area_unit_label(unit),
            round(min(xs), 2), round(min(ys), 2),
            round(max(xs) - min(xs), 2), round(max(ys) - min(ys), 2), '', '',
            round(region.perimeter_px / session.pixels_per_unit, 4),
        ])
    for idx, saved in enumerate(session.saved_regions, start=1):
        r = saved.rect
        rows.append([
            'rectangle', idx, round(r.w * r.h, 2), round(saved.real_area, 4),
            area_unit_label(rect_unit),
            round(r.x, 2), round(r.y, 2), round(r.w, 2), round(r.h, 2),
            saved.real_width, saved.real_height,
            round(2 * (saved.real_width + saved.real_height), 4),
        ])
    return rows


def write_csv(session: Session, path: Union[str, Path], unit: str = 'm', rect_unit: str = 'ft') -> int:
    """Write the detected room and saved selections to ``path``; return the row count."""
    rows = measurement_rows(session, unit, rect_unit)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerows(rows)
    logger.info("Exported %d measurements to %s", len(rows), path)
    return len(rows)


def export_csv(app: "MeasureAppGUI") -> None:
    unit = app.config.get('unit', 'm')
    rect_unit = app.config.get('rect_unit', 'ft')
    if not measurement_rows(app.session, unit, rect_unit):
        if messagebox:
            messagebox.showwarning("Warning", "No measurements to export.")
        return
    if filedialog is None:
        return
    path = filedialog.asksaveasfilename(title="Save CSV", defaultextension='.csv', filetypes=[("CSV files", "*.csv")])
    if not path:
        return
    try:
        write_csv(app.session, path, unit, rect_unit)
        if messagebox:
            messagebox.showinfo("Export", "Measurements exported successfully.")
    except Exception as e:
        logger.exception("CSV export to %s failed", path)
        if messagebox:
            messagebox.showerror("Error", f"Failed to export CSV: {e}")
