from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Union

try:
    from tkinter import filedialog, messagebox
except Exception:  # pragma: no cover
    filedialog = None  # type: ignore
    messagebox = None  # type: ignore

import pymupdf as fitz
from PIL import Image

from . import config as config_mod

if TYPE_CHECKING:
    from .gui_client import MeasureAppGUI

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = [
    ("Blueprints", "*.png *.jpg *.jpeg *.bmp *.gif *.tif *.tiff *.webp *.pdf"),
    ("PDF files", "*.pdf"),
    ("All files", "*.*"),
]


def _pdf_page_to_image(pdf_path: Union[str, Path], page_number: int = 0, zoom: float = 2) -> Image.Image:
    """Load the specified page of a PDF and convert it to a PIL Image."""
    with open(pdf_path, 'rb') as f:
        doc = fitz.open(stream=f.read(), filetype='pdf')
    try:
        if page_number < 0 or page_number >= len(doc):
            raise ValueError(f"Invalid page number {page_number} for PDF with {len(doc)} pages")
        page = doc.load_page(page_number)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom))
        mode = 'RGB' if pix.alpha == 0 else 'RGBA'
        return Image.frombytes(mode, [pix.width, pix.height], pix.samples).convert('RGB')
    finally:
        doc.close()


def open_image(path: Union[str, Path], pdf_zoom: float = 2) -> Image.Image:
    """Open a blueprint from an image file or the first page of a PDF."""
    path = Path(path)
    if path.suffix.lower() == '.pdf':
        return _pdf_page_to_image(path, 0, pdf_zoom)
    with Image.open(path) as img:
        img.load()
        return img.convert('RGB')


def load_image_file(app: "MeasureAppGUI", path: Union[str, Path]) -> bool:
    try:
        img = open_image(path, float(app.config.get('pdf_zoom', 2)))
    except Exception as e:
        logger.exception("Failed to open %s", path)
        if messagebox:
            messagebox.showerror("Error", f"Failed to load image: {e}")
        return False
    app.current_document_path = str(path)
    app.session.load_image(img)
    app.root.title(f"Blueprint Area Tool - {Path(path).name}")
    app.refresh()
    return True


def load_image(app: "MeasureAppGUI") -> None:
    if filedialog is None:
        return
    path = filedialog.askopenfilename(title="Select Blueprint", filetypes=IMAGE_FILETYPES)
    if not path:
        return
    load_image_file(app, path)


def load_config(app: "MeasureAppGUI") -> None:
    if filedialog is None:
        return
    path = filedialog.askopenfilename(title="Select Config JSON", filetypes=[("JSON files", "*.json")])
    if not path:
        return
    try:
        app.apply_config(config_mod.load_config(path))
        if messagebox:
            messagebox.showinfo("Config", "Configuration loaded.")
    except Exception as e:
        logger.exception("Failed to load configuration from %s", path)
        if messagebox:
            messagebox.showerror("Error", f"Failed to load configuration: {e}")


def save_config(app: "MeasureAppGUI") -> None:
    if filedialog is None:
        return
    path = filedialog.asksaveasfilename(title="Save Config", defaultextension='.json', filetypes=[("JSON files", "*.json")])
    if not path:
        return
    try:
        config_mod.save_config(app.config, path)
        if messagebox:
            messagebox.showinfo("Config", "Configuration saved.")
    except Exception as e:
        logger.exception("Failed to save configuration to %s", path)
        if messagebox:
            messagebox.showerror("Error", f"Failed to save configuration: {e}")
