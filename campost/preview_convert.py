"""Conversion of YUV420 frames to scaled RGB images for a preview window."""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

import numpy as np

from .stage import ColourSpace, StreamInfo

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 384


class YuvCoefficients(NamedTuple):
    """Matrix terms for converting YUV back to RGB."""

    offset_y: int
    coeff_y: float
    coeff_vr: float
    coeff_ug: float
    coeff_vg: float
    coeff_ub: float


_JPEG = YuvCoefficients(0, 1.0, 1.402, -0.344, -0.714, 1.772)
_SMPTE170M = YuvCoefficients(16, 1.164, 1.596, -0.392, -0.813, 2.017)
_REC709 = YuvCoefficients(16, 1.164, 1.793, -0.213, -0.533, 2.112)


def window_size(width: int, height: int) -> tuple[int, int]:
    """Preview window size; dimensions must be even and zero means the small default."""
    if width % 2 or height % 2:
        raise ValueError("expect even dimensions")
    if width == 0 or height == 0:
        return DEFAULT_WIDTH, DEFAULT_HEIGHT
    return width, height


def yuv_coefficients(colour_space: Optional[ColourSpace]) -> YuvCoefficients:
    """Choose the conversion matrix for a colour space."""
    if colour_space is ColourSpace.SMPTE170M:
        return _SMPTE170M
    if colour_space is ColourSpace.REC709:
        return _REC709
    if colour_space is not ColourSpace.SYCC:
        logger.warning("unexpected colour space %s", colour_space)
    return _JPEG


def resample_yuv420_to_rgb(data: Any, info: StreamInfo, width: int, height: int) -> np.ndarray:
    """Nearest-neighbour resample a YUV420 frame to a height x width x 3 RGB array.

    Horizontally adjacent output pixel pairs share one U, V sample.
    """
    if width <= 0 or height <= 0 or width % 2:
        raise ValueError("output dimensions must be positive and the width even")
    if isinstance(data, (bytes, bytearray, memoryview)):
        src = np.frombuffer(data, dtype=np.uint8)
    else:
        src = np.asarray(data, dtype=np.uint8).reshape(-1)

    stride = info.stride
    half_stride = stride >> 1
    x_step = (info.width << 16) // width
    y_step = (info.height << 16) // height

    rows = (np.arange(height, dtype=np.int64) * y_step) >> 16
    pairs = np.arange(width // 2, dtype=np.int64)
    pos0 = (x_step >> 1) + 2 * pairs * x_step
    pos1 = pos0 + x_step
    y0_cols = pos0 >> 16
    y1_cols = pos1 >> 16
    uv_cols = pos1 >> 17

    if int(y1_cols.max()) >= stride or int(uv_cols.max()) >= half_stride:
        raise ValueError("stream stride too small for its width")
    y_base = rows * stride
    u_base = ((4 * info.height + rows) >> 1) * half_stride
    v_base = ((5 * info.height + rows) >> 1) * half_stride
    if int(v_base.max()) + half_stride > src.size:
        raise ValueError("image buffer too small for its stream info")

    coeffs = yuv_coefficients(info.colour_space)
    f32 = np.float32
    y0 = (src[y_base[:, None] + y0_cols[None, :]].astype(np.int32) - coeffs.offset_y).astype(f32)
    y1 = (src[y_base[:, None] + y1_cols[None, :]].astype(np.int32) - coeffs.offset_y).astype(f32)
    u = (src[u_base[:, None] + uv_cols[None, :]].astype(np.int32) - 128).astype(f32)
    v = (src[v_base[:, None] + uv_cols[None, :]].astype(np.int32) - 128).astype(f32)

    cy, cvr = f32(coeffs.coeff_y), f32(coeffs.coeff_vr)
    cug, cvg, cub = f32(coeffs.coeff_ug), f32(coeffs.coeff_vg), f32(coeffs.coeff_ub)

    def to_rgb(luma: np.ndarray) -> np.ndarray:
        red = cy * luma + cvr * v
        green = cy * luma + cug * u + cvg * v
        blue = cy * luma + cub * u
        return np.stack([red, green, blue], axis=-1)

    pixels = np.stack([to_rgb(y0), to_rgb(y1)], axis=2)
    rgb = np.clip(np.trunc(pixels), 0, 255).astype(np.uint8)
    return rgb.reshape(height, width, 3)