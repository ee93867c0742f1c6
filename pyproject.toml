[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "crewsched"
version = "0.1.0"
description = "Bus crew scheduling: layered construction, assignment-based recombination and perturbation of driver journeys"
requires-python = ">=3.10"
dependencies = []
keywords = ["crew scheduling", "bus", "assignment problem", "hungarian method", "local search"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["crewsched*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
