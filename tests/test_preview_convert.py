import numpy as np
import pytest

from campost.preview_convert import (
    resample_yuv420_to_rgb,
    window_size,
    yuv_coefficients,
)
from campost.stage import ColourSpace, StreamInfo


def _frame(width, height, luma, u=128, v=128):
    luma = np.asarray(luma, dtype=np.uint8).reshape(height, width)
    chroma = (height // 2) * (width // 2)
    return luma.tobytes() + bytes([u]) * chroma + bytes([v]) * chroma


def test_window_size_default():
    assert window_size(0, 0) == (512, 384)


def test_window_size_kept():
    assert window_size(640, 480) == (640, 480)


@pytest.mark.parametrize("width,height", [(3, 4), (4, 3), (0, 5)])
def test_window_size_odd_rejected(width, height):
    with pytest.raises(ValueError):
        window_size(width, height)


def test_rec709_coefficients():
    assert tuple(yuv_coefficients(ColourSpace.REC709)) == (16, 1.164, 1.793, -0.213, -0.533, 2.112)


def test_smpte_coefficients():
    assert tuple(yuv_coefficients(ColourSpace.SMPTE170M)) == (16, 1.164, 1.596, -0.392, -0.813, 2.017)


def test_unknown_colour_space_uses_full_range():
    assert yuv_coefficients(None) == yuv_coefficients(ColourSpace.SYCC)
    assert yuv_coefficients(ColourSpace.SYCC).offset_y == 0


def test_identity_size_neutral_chroma_copies_luma():
    width, height = 8, 4
    luma = np.arange(width * height, dtype=np.uint8).reshape(height, width) * 7
    info = StreamInfo(width, height, width, ColourSpace.SYCC)
    out = resample_yuv420_to_rgb(_frame(width, height, luma), info, width, height)
    assert out.shape == (height, width, 3)
    for channel in range(3):
        assert np.array_equal(out[:, :, channel], luma)


def test_rec709_black_level():
    width, height = 8, 4
    info = StreamInfo(width, height, width, ColourSpace.REC709)
    out = resample_yuv420_to_rgb(_frame(width, height, [16] * 32), info, 4, 2)
    assert not out.any()


def test_downscale_picks_source_values():
    width, height = 16, 8
    luma = np.arange(width * height, dtype=np.uint8).reshape(height, width)
    info = StreamInfo(width, height, width, ColourSpace.SYCC)
    out = resample_yuv420_to_rgb(_frame(width, height, luma), info, 8, 4)
    assert out.shape == (4, 8, 3)
    assert set(out[:, :, 1].ravel()) <= set(luma.ravel())
    assert np.array_equal(out[:, :, 0], out[:, :, 2])


def test_strong_chroma_is_clamped():
    width, height = 4, 2
    info = StreamInfo(width, height, width, ColourSpace.SYCC)
    out = resample_yuv420_to_rgb(_frame(width, height, [250] * 8, u=255, v=255), info, 4, 2)
    assert out[:, :, 0].min() == 255
    assert out[:, :, 2].min() == 255


def test_buffer_too_small():
    info = StreamInfo(8, 4, 8, ColourSpace.SYCC)
    with pytest.raises(ValueError):
        resample_yuv420_to_rgb(bytes(8 * 4), info, 8, 4)


@pytest.mark.parametrize("width,height", [(3, 4), (0, 4), (4, 0)])
def test_bad_output_size(width, height):
    info = StreamInfo(8, 4, 8, ColourSpace.SYCC)
    with pytest.raises(ValueError):
        resample_yuv420_to_rgb(_frame(8, 4, [0] * 32), info, width, height)