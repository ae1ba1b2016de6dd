# campost

Building blocks for post-processing camera frames in Python. Each part works on plain
bytes and numpy arrays, so none of it needs a live camera.

## Contents

- `campost.pwl` has `Pwl`, a piecewise linear function. It can evaluate (`eval`,
  `eval_span`), invert, compose and combine curves (`compose`, `map`, `map2`, `combine`),
  extend itself to a domain (`match_domain`) and generate lookup tables (`generate_lut`).
  `Interval`, `Point` and `PerpType` support it. Invalid input, such as too few control
  points or x values that do not increase, raises `ValueError`.
- `campost.stage` has the abstract `PostProcessingStage` base class and a registry of
  stage factories (`register_stage`, `get_post_processing_stages`). It also defines
  `StreamInfo` and `ColourSpace`, and `yuv420_to_rgb`, which converts a YUV420 image to
  packed RGB and crops from the centre of the source when it is larger. Two helpers
  come with it: `get_json_array` reads a list from a parameter mapping and pads it from
  a default, and `execution_time` times a call in microseconds.
- `campost.detection` has the `Rectangle` (with `area` and `bounded_to`), `Detection` and
  `Segmentation` result types.
- `campost.pose_estimation` checks the shape of a pose network's heatmap tensor
  (`check_output_dims`) and turns heatmaps and offsets into 17 feature locations in
  main-image coordinates with their confidences (`interpret_pose`).
- `campost.pose_plot` names the 17 body features (`Feature`), works out which features
  get a circle (`low_confidence_points`) and which pairs get joined (`skeleton_segments`),
  and draws poses into the luma plane of a frame in place (`draw_features`, `plot_poses`).
- `campost.udp` encodes a detection as a fixed-size little-endian datagram
  (`encode_detection`) and sends each detection of a frame over UDP with
  `DetectionSender`, which reads its destination from `ip` and `port` parameters and can
  be used as a context manager.
- `campost.preview_convert` picks a preview window size (`window_size`), the YUV to RGB
  matrix for a colour space (`yuv_coefficients`), and resamples a YUV420 frame to an RGB
  array of that size (`resample_yuv420_to_rgb`).

## Installation

```
pip install campost
```

## Example

```python
from campost.pwl import Pwl, Point

curve = Pwl([Point(0, 0), Point(128, 200), Point(255, 255)])
print(curve.eval(64))          # 100.0
lut = curve.generate_lut()     # 256 entries
```

```python
from campost.stage import StreamInfo, yuv420_to_rgb

src = StreamInfo(width=640, height=480, stride=640)
dst = StreamInfo(width=300, height=300, stride=900)
rgb = yuv420_to_rgb(frame_bytes, src, dst)   # flat uint8 array, dst.height * dst.stride long
```

```python
from campost.detection import Detection, Rectangle
from campost.udp import DetectionSender

with DetectionSender("127.0.0.1", 12347) as sender:
    sender.send([Detection(1, "person", 0.9, Rectangle(10, 20, 100, 200))])
```

## What it does not do

The package does not talk to a camera, run neural-network models, or open preview
windows. It has no command-line program. Pose results must come from a model run
elsewhere. `resample_yuv420_to_rgb` only produces an RGB array; showing it is up to the
caller.

## Tests

```
pip install campost[test]
pytest
```