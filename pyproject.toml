[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fortunevoronoi"
version = "0.1.0"
description = "Voronoi diagrams in a bounding box, computed with Fortune's sweep-line algorithm"
requires-python = ">=3.10"
dependencies = []
keywords = ["voronoi", "fortune", "computational-geometry", "red-black-tree", "sweep-line"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Typing :: Typed",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fortunevoronoi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
