from __future__ import annotations

import math
from typing import Optional


class MeasureError(Exception):
    """Recoverable, user-facing condition raised inside a measuring operation."""

    message: str = "Something went wrong."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message


class NoImageLoaded(MeasureError):
    message = "Upload an image first."


class InvalidClickLocation(MeasureError):
    message = "Click inside the blueprint image area."


class InvalidCalibrationInput(MeasureError):
    message = "Enter a valid real distance."


class CalibrationRequired(MeasureError):
    message = "Set scale first (2 clicks)."


class DetectorNotReady(MeasureError):
    message = "Detector still loading… try again in a moment."


class RegionNotFound(MeasureError):
    message = (
        "Couldn't find a closed room outline. "
        "Try a clearer image or click again inside the room."
    )


class RegionDegenerate(MeasureError):
    message = "Detected shape was too small/invalid. Try another click or a higher-res image."


class SelectionTooSmall(MeasureError):
    message = "Selection too small. Drag a larger rectangle."


class InvalidRealDimensions(MeasureError):
    message = "Width and height must be positive numbers. Selection discarded."


class DetectorFailure(MeasureError):
    message = "Error during detection. Try a simpler or high-contrast image."


def parse_positive_number(raw: object, error: type[MeasureError] = MeasureError) -> float:
    """Return ``raw`` as a finite float > 0 or raise ``error``."""
    if raw is None or isinstance(raw, bool):
        raise error()
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            raise error()
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise error()
    if not math.isfinite(value) or value <= 0:
        raise error()
    return value
