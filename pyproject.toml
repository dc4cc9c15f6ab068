[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "get2bed"
version = "0.1.0"
description = "A small tile-based puzzle game: drink your water and get to bed without meeting the monster."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "puzzle", "tiles", "xpm", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
get2bed = "get2bed.display:main"

[tool.hatch.build.targets.wheel]
packages = ["get2bed"]

[tool.pytest.ini_options]
addopts = "-ra"
