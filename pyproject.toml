[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "defillet"
version = "0.1.0"
description = "Triangle mesh building blocks: 3D vector geometry, OBJ/OFF/M mesh I/O, max-flow minimum cuts and label-based mesh segmentation."
requires-python = ">=3.10"
dependencies = []
keywords = ["mesh", "geometry", "max-flow", "min-cut", "graph-cut", "segmentation", "obj", "off"]
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
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["defillet"]

[tool.pytest.ini_options]
addopts = "-ra"
