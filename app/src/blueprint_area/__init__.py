"""Blueprint area measurement: scale calibration, room detection and area."""

__version__ = "0.1.0"
