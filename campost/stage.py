"""Post-processing stage base class, stage registry and image helpers."""

from __future__ import annotations

import enum
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Sequence

import numpy as np


class ColourSpace(enum.Enum):
    RAW = "raw"
    SYCC = "sycc"
    SMPTE170M = "smpte170m"
    REC709 = "rec709"


@dataclass
class StreamInfo:
    """Geometry of an image stream."""

    width: int = 0
    height: int = 0
    stride: int = 0
    colour_space: Optional[ColourSpace] = None


class PostProcessingStage(ABC):
    """Base class for stages that inspect or modify completed requests.

    The default lifecycle hooks only record where the stage is in its lifecycle.
    """

    def __init__(self, app: Any = None):
        self.app = app
        self.params: dict[str, Any] = {}
        self.use_case: Optional[str] = None
        self.configured = False
        self.running = False

    @abstractmethod
    def name(self) -> str:
        """The name the stage is registered under."""

    def read(self, params: Mapping[str, Any]) -> None:
        self.params = dict(params)

    def adjust_config(self, use_case: str, config: Any) -> None:
        self.use_case = use_case

    def configure(self) -> None:
        self.configured = True

    def start(self) -> None:
        self.running = True

    @abstractmethod
    def process(self, completed_request: Any) -> bool:
        """Handle one request; return True if it is to be dropped."""

    def stop(self) -> None:
        self.running = False

    def teardown(self) -> None:
        self.configured = False


StageFactory = Callable[[Any], PostProcessingStage]

_stages: dict[str, StageFactory] = {}


def register_stage(name: str, factory: StageFactory) -> StageFactory:
    """Register a stage factory under name, replacing any earlier one."""
    _stages[name] = factory
    return factory


def get_post_processing_stages() -> Mapping[str, StageFactory]:
    return MappingProxyType(_stages)


def get_json_array(params: Mapping[str, Any], key: str, default: Sequence = ()) -> list:
    """Read a list from params, padded with the tail of default."""
    values = list(params[key]) if key in params else []
    values.extend(default[len(values):])
    return values


def execution_time(func: Callable, *args: Any) -> float:
    """Run func(*args) and return the time it took in microseconds."""
    start = time.perf_counter()
    func(*args)
    return (time.perf_counter() - start) * 1e6


def _as_bytes_array(src: Any) -> np.ndarray:
    if isinstance(src, (bytes, bytearray, memoryview)):
        return np.frombuffer(src, dtype=np.uint8)
    return np.asarray(src, dtype=np.uint8).reshape(-1)


def yuv420_to_rgb(src: Any, src_info: StreamInfo, dst_info: StreamInfo) -> np.ndarray:
    """Convert a YUV420 image to packed RGB, cropping from the centre of src.

    Returns a flat uint8 array of dst_info.height * dst_info.stride bytes.
    """
    if src_info.width < dst_info.width or src_info.height < dst_info.height:
        raise ValueError("source image is smaller than the destination")
    if dst_info.stride < dst_info.width * 3:
        raise ValueError("destination stride too small for RGB output")

    data = _as_bytes_array(src)
    stride = src_info.stride
    off_x = ((src_info.width - dst_info.width) // 2) & ~1
    off_y = ((src_info.height - dst_info.height) // 2) & ~1
    y_size = src_info.height * stride
    u_size = (src_info.height // 2) * (stride // 2)

    out = np.zeros(dst_info.height * dst_info.stride, dtype=np.uint8)
    if dst_info.width == 0 or dst_info.height == 0:
        return out

    rows = np.arange(dst_info.height) + off_y
    cols = np.arange(dst_info.width)
    y_idx = rows[:, None] * stride + (cols + off_x)[None, :]
    u_idx = y_size + (rows // 2)[:, None] * (stride // 2) + (off_x // 2 + cols // 2)[None, :]
    if int(u_idx.max()) + u_size >= data.size or int(y_idx.max()) >= data.size:
        raise ValueError("source buffer too small for its stream info")

    luma = data[y_idx].astype(np.float64)
    u = data[u_idx].astype(np.float64) - 128
    v = data[u_idx + u_size].astype(np.float64) - 128

    red = np.trunc(luma + 1.402 * v)
    green = np.trunc(luma - 0.345 * u - 0.714 * v)
    blue = np.trunc(luma + 1.771 * u)
    rgb = np.clip(np.stack([red, green, blue], axis=-1), 0, 255).astype(np.uint8)

    out.reshape(dst_info.height, dst_info.stride)[:, : dst_info.width * 3] = rgb.reshape(
        dst_info.height, dst_info.width * 3
    )
    return out