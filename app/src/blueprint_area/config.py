from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'unit': 'm',  # calibration unit: m, ft or in
    'rect_unit': 'ft',  # unit of prompted rectangle dimensions
    'min_selection_px': 10,
    'canvas_width': 1000,
    'canvas_height': 700,
    'pdf_zoom': 2,
    'detector': {
        'blur_kernel': 5,
        'canny_low': 50,
        'canny_high': 150,
        'close_kernel': 5,
        'min_contour_area': 2000,
        'approx_epsilon': 0.01,
    },
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``override``, merging nested dicts."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    logger.info("Loaded config from %s", path)
    return merge_config(DEFAULT_CONFIG, data)


def save_config(cfg: Dict[str, Any], path: Union[str, Path]) -> None:
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(cfg, f, indent=2)
    logger.info("Saved config to %s", path)
