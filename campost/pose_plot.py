"""Drawing estimated body poses onto the luma plane of an image."""

from __future__ import annotations

import enum
from typing import Any, Sequence

import numpy as np
from PIL import Image, ImageDraw

from .stage import StreamInfo

NAME = "plot_pose_cv"
FEATURE_SIZE = 17
DEFAULT_THRESHOLD = -1.0
_COLOUR = 255
_RADIUS = 5
_THICKNESS = 2


class Feature(enum.IntEnum):
    """Body features in the order the pose network reports them."""

    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


_SKELETON = (
    (Feature.LEFT_SHOULDER, Feature.RIGHT_SHOULDER),
    (Feature.LEFT_SHOULDER, Feature.LEFT_ELBOW),
    (Feature.LEFT_SHOULDER, Feature.LEFT_HIP),
    (Feature.RIGHT_SHOULDER, Feature.RIGHT_ELBOW),
    (Feature.RIGHT_SHOULDER, Feature.RIGHT_HIP),
    (Feature.LEFT_ELBOW, Feature.LEFT_WRIST),
    (Feature.RIGHT_ELBOW, Feature.RIGHT_WRIST),
    (Feature.LEFT_HIP, Feature.RIGHT_HIP),
    (Feature.LEFT_HIP, Feature.LEFT_KNEE),
    (Feature.LEFT_KNEE, Feature.LEFT_ANKLE),
    (Feature.RIGHT_KNEE, Feature.RIGHT_HIP),
    (Feature.RIGHT_KNEE, Feature.RIGHT_ANKLE),
)


def _check_confidences(confidences: Sequence[float]) -> None:
    if len(confidences) < FEATURE_SIZE:
        raise ValueError(f"expected {FEATURE_SIZE} confidences, got {len(confidences)}")


def skeleton_segments(
    confidences: Sequence[float], threshold: float = DEFAULT_THRESHOLD
) -> list[tuple[Feature, Feature]]:
    """Pairs of features to join: both ends must be above the threshold."""
    _check_confidences(confidences)
    return [
        (a, b) for a, b in _SKELETON if confidences[a] > threshold and confidences[b] > threshold
    ]


def low_confidence_points(
    confidences: Sequence[float], threshold: float = DEFAULT_THRESHOLD
) -> list[Feature]:
    """Features whose confidence is below the threshold; these are marked with a circle."""
    _check_confidences(confidences)
    return [Feature(i) for i in range(FEATURE_SIZE) if confidences[i] < threshold]


def _luma_plane(buffer: Any, info: StreamInfo) -> np.ndarray:
    if isinstance(buffer, np.ndarray):
        if not buffer.flags.c_contiguous or not buffer.flags.writeable:
            raise ValueError("image buffer must be a writable contiguous array")
        pixels = buffer.reshape(-1).view(np.uint8)
    else:
        if memoryview(buffer).readonly:
            raise TypeError("image buffer must be writable")
        pixels = np.frombuffer(buffer, dtype=np.uint8)
    if info.stride < info.width or pixels.size < info.height * info.stride:
        raise ValueError("image buffer too small for its stream info")
    return pixels[: info.height * info.stride].reshape(info.height, info.stride)[:, : info.width]


def draw_features(
    buffer: Any,
    info: StreamInfo,
    locations: Sequence[Sequence[int]],
    confidences: Sequence[float],
    threshold: float = DEFAULT_THRESHOLD,
) -> None:
    """Draw one pose into the luma plane of a YUV420 image in place."""
    if len(locations) < FEATURE_SIZE:
        raise ValueError(f"expected {FEATURE_SIZE} locations, got {len(locations)}")
    circles = low_confidence_points(confidences, threshold)
    segments = skeleton_segments(confidences, threshold)

    plane = _luma_plane(buffer, info)
    image = Image.fromarray(np.ascontiguousarray(plane))
    draw = ImageDraw.Draw(image)
    for feature in circles:
        x, y = locations[feature]
        draw.ellipse(
            (x - _RADIUS, y - _RADIUS, x + _RADIUS, y + _RADIUS),
            outline=_COLOUR,
            width=_THICKNESS,
        )
    for a, b in segments:
        start = tuple(int(v) for v in locations[a])
        end = tuple(int(v) for v in locations[b])
        draw.line([start, end], fill=_COLOUR, width=_THICKNESS)
    plane[...] = np.asarray(image)


def plot_poses(
    buffer: Any,
    info: StreamInfo,
    all_locations: Sequence[Sequence[Sequence[int]]],
    all_confidences: Sequence[Sequence[float]],
    threshold: float = DEFAULT_THRESHOLD,
) -> None:
    """Draw every pose that has both locations and confidences."""
    for locations, confidences in zip(all_locations, all_confidences):
        if locations and confidences:
            draw_features(buffer, info, locations, confidences, threshold)