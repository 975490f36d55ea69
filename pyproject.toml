[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "miniconsole"
version = "0.1.0"
description = "Tower defense game logic with A* grid pathfinding, waves and towers, plus a keyboard-driven game menu model"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "tower-defense", "pathfinding", "a-star", "simulation", "menu"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["miniconsole"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
