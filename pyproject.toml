[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "einsteinpuzzle"
version = "0.1.0"
description = "Logic puzzle engine: puzzle generation, hint rules, candidates grid, message catalogues and resource files"
requires-python = ">=3.10"
dependencies = []
keywords = ["puzzle", "logic", "einstein", "zebra", "game", "mersenne-twister"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
einsteinpuzzle = "einsteinpuzzle.generator:main"

[tool.setuptools.packages.find]
include = ["einsteinpuzzle*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
