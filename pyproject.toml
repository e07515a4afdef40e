[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockstage"
version = "0.1.0"
description = "Block-based stage model for a 3D platformer: cube kinds, baked transforms and bounding boxes, JSON stage files, a stoppable timer and title menu logic"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["game", "platformer", "stage", "level", "cube", "aabb", "matrix"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["blockstage"]

[tool.pytest.ini_options]
addopts = "-ra"
