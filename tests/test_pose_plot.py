import numpy as np
import pytest

from campost.pose_plot import (
    FEATURE_SIZE,
    Feature,
    draw_features,
    low_confidence_points,
    plot_poses,
    skeleton_segments,
)
from campost.stage import StreamInfo

WIDTH = HEIGHT = STRIDE = 64
INFO = StreamInfo(width=WIDTH, height=HEIGHT, stride=STRIDE)


def _buffer():
    return bytearray(STRIDE * HEIGHT * 3 // 2)


def _luma(buffer):
    return np.frombuffer(bytes(buffer), dtype=np.uint8)[: STRIDE * HEIGHT].reshape(HEIGHT, STRIDE)


def _shoulder_pose():
    locations = [(5, 5)] * FEATURE_SIZE
    locations[Feature.LEFT_SHOULDER] = (10, 30)
    locations[Feature.RIGHT_SHOULDER] = (50, 30)
    confidences = [0.0] * FEATURE_SIZE
    confidences[Feature.LEFT_SHOULDER] = 1.0
    confidences[Feature.RIGHT_SHOULDER] = 1.0
    return locations, confidences


def test_all_confident_gives_full_skeleton():
    segments = skeleton_segments([1.0] * FEATURE_SIZE, 0.5)
    assert (Feature.LEFT_SHOULDER, Feature.RIGHT_SHOULDER) in segments
    assert (Feature.RIGHT_KNEE, Feature.RIGHT_ANKLE) in segments
    assert len(segments) == len(set(segments))
    assert all(Feature.NOSE not in pair for pair in segments)


def test_no_segments_below_threshold():
    assert skeleton_segments([0.2] * FEATURE_SIZE, 0.5) == []


def test_segments_need_both_ends():
    _, confidences = _shoulder_pose()
    assert skeleton_segments(confidences, 0.5) == [(Feature.LEFT_SHOULDER, Feature.RIGHT_SHOULDER)]


def test_equal_to_threshold_is_neither():
    confidences = [0.5] * FEATURE_SIZE
    assert skeleton_segments(confidences, 0.5) == []
    assert low_confidence_points(confidences, 0.5) == []


def test_low_confidence_points():
    _, confidences = _shoulder_pose()
    points = low_confidence_points(confidences, 0.5)
    assert Feature.LEFT_SHOULDER not in points
    assert Feature.NOSE in points
    assert len(points) == FEATURE_SIZE - 2


def test_short_confidences_raise():
    with pytest.raises(ValueError):
        skeleton_segments([1.0] * 5, 0.5)


def test_draw_line_between_shoulders():
    buffer = _buffer()
    locations, confidences = _shoulder_pose()
    draw_features(buffer, INFO, locations, confidences, 0.5)
    luma = _luma(buffer)
    assert luma[30, 30] == 255
    assert luma[60, 60] == 0
    chroma = np.frombuffer(bytes(buffer), dtype=np.uint8)[STRIDE * HEIGHT:]
    assert not chroma.any()


def test_circle_is_a_ring():
    buffer = _buffer()
    locations = [(20, 20)] * FEATURE_SIZE
    draw_features(buffer, INFO, locations, [0.0] * FEATURE_SIZE, 0.5)
    luma = _luma(buffer)
    assert luma[20, 20] == 0
    assert luma[14:27, 14:27].max() == 255
    assert luma[40:, :].max() == 0


def test_read_only_buffer_rejected():
    locations, confidences = _shoulder_pose()
    with pytest.raises(TypeError):
        draw_features(bytes(STRIDE * HEIGHT * 2), INFO, locations, confidences, 0.5)


def test_short_locations_rejected():
    with pytest.raises(ValueError):
        draw_features(_buffer(), INFO, [(0, 0)] * 3, [1.0] * FEATURE_SIZE, 0.5)


def test_plot_poses_skips_empty_entries():
    buffer = _buffer()
    locations, confidences = _shoulder_pose()
    plot_poses(buffer, INFO, [[], locations], [[1.0] * FEATURE_SIZE, confidences], 0.5)
    assert _luma(buffer)[30, 30] == 255


def test_plot_poses_with_nothing_leaves_image():
    buffer = _buffer()
    plot_poses(buffer, INFO, [[]], [[]], 0.5)
    assert buffer == bytearray(STRIDE * HEIGHT * 3 // 2)