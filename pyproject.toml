[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "carrotdefense"
version = "0.1.0"
description = "A grid-based tower defence game engine: enemies walk a path, towers shoot them, and waves end in a win or a loss."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "tower-defense", "simulation", "strategy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
carrotdefense = "carrotdefense.app:main"

[tool.hatch.build.targets.wheel]
packages = ["carrotdefense"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
