"""Interpretation of pose estimation network outputs."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from .stage import StreamInfo

NAME = "pose_estimation_tf"
FEATURE_SIZE = 17
HEATMAP_DIMS = 9
INPUT_WIDTH = 257
INPUT_HEIGHT = 257


def check_output_dims(dims: Sequence[int]) -> None:
    """Raise ValueError unless the heatmap tensor is 1 x 9 x 9 x 17."""
    if tuple(dims[:4]) != (1, HEATMAP_DIMS, HEATMAP_DIMS, FEATURE_SIZE):
        raise ValueError("unexpected output dimensions for pose estimation")


def interpret_pose(
    heatmaps: Any, offsets: Any, main_info: StreamInfo
) -> tuple[list[tuple[int, int]], list[float]]:
    """Locate each body feature in main image coordinates.

    Returns the (x, y) location and confidence of every feature.
    """
    heat = np.asarray(heatmaps, dtype=np.float32).reshape(-1)
    offs = np.asarray(offsets, dtype=np.float32).reshape(-1)
    cells = HEATMAP_DIMS * HEATMAP_DIMS
    if heat.size < cells * FEATURE_SIZE or offs.size < cells * FEATURE_SIZE * 2:
        raise ValueError("pose estimation outputs are too small")

    heats: list[tuple[int, int]] = []
    confidences: list[float] = []
    for feature in range(FEATURE_SIZE):
        best = heat[feature]
        coord = (0, 0)
        for y in range(HEATMAP_DIMS):
            for x in range(HEATMAP_DIMS):
                value = heat[FEATURE_SIZE * (HEATMAP_DIMS * y + x) + feature]
                if value > best:
                    best = value
                    coord = (x, y)
        heats.append(coord)
        confidences.append(float(best))

    locations: list[tuple[int, int]] = []
    for feature, (x, y) in enumerate(heats):
        j = FEATURE_SIZE * 2 * (HEATMAP_DIMS * y + x) + feature
        loc_y = int((y * main_info.height) // (HEATMAP_DIMS - 1) + offs[j])
        loc_x = int((x * main_info.width) // (HEATMAP_DIMS - 1) + offs[j + FEATURE_SIZE])
        locations.append((loc_x, loc_y))

    return locations, confidences