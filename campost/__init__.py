"""Piecewise linear curves, YUV420 conversion, detection results, pose handling and preview resampling for camera frames."""

__version__ = "1.11.1"

__all__ = [
    "detection",
    "pose_estimation",
    "pose_plot",
    "preview_convert",
    "pwl",
    "stage",
    "udp",
]