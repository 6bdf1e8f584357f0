"""
Unified facade that re-exports feature functions from the modular packages
so the GUI client has a single place to call into.
"""

from __future__ import annotations

# Scale
from ..features.scale.scale import (
    set_scale_mode as scale_set_mode,
    cancel_scale_mode as scale_cancel_mode,
    scale_on_canvas_click as scale_on_canvas_click,
    scale_summary as scale_summary,
)

# Auto-detect
from ..features.detect.auto_detect import (
    set_auto_mode as auto_set_mode,
    auto_on_canvas_click as auto_on_canvas_click,
    acquire_by_seed as auto_acquire,
)
from ..features.detect.contours import ContourRegionDetector as ContourRegionDetector

# Rectangle selection
from ..features.editing.drag import (
    set_rectangle_mode as rect_set_mode,
    on_drag_start as drag_start,
    on_drag_move as drag_move,
    on_drag_end as drag_end,
    undo_last_selection as drag_undo,
)

# File I/O
from ..file_io import (
    load_image as file_load_image,
    load_image_file as file_load_image_path,
    load_config as file_load_config,
    save_config as file_save_config,
)

# Export
from ..app_io.export_mod import export_csv as export_csv

# Rendering
from ..ui.render import render_session as render_session
