[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "topohomology"
version = "0.1.0"
description = "Boundary-matrix reduction algorithms for persistent homology, persistence pair I/O and Gmsh mesh readers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "persistent homology",
    "topology",
    "boundary matrix",
    "persistence pairs",
    "gmsh",
    "tetrahedral mesh",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["topohomology"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
