[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "campost"
version = "1.11.1"
description = "Building blocks for post-processing camera frames: piecewise linear curves, YUV420 to RGB conversion, detection results over UDP, pose interpretation and plotting, and preview resampling."
requires-python = ">=3.10"
keywords = ["camera", "yuv420", "post-processing", "object-detection", "pose-estimation", "udp", "preview"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["campost"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
