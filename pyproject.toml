[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "robonav"
version = "0.1.0"
description = "Planar mobile-robot localization helpers: 2D geometry, Kalman filters, k-d trees, velocity filtering and a visual-map matching client"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["robotics", "localization", "kalman-filter", "kd-tree", "odometry", "velocity-control"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["robonav"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
