[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atomsim"
version = "0.1.0"
description = "Bouncing atoms: a small 2D elastic-collision animation on a simple drawing surface"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["simulation", "physics", "collision", "animation", "drawing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Education",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
atomsim = "atomsim.simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["atomsim"]

[tool.pytest.ini_options]
addopts = "-ra"
