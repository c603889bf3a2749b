[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dronesim"
version = "1.0.0"
description = "Small simulations for multicopter control: PID loops, motor and shape models, PID autotuning, receiver and gyro setup helpers, and trigonometric simplification."
requires-python = ">=3.10"
dependencies = [
    "sympy",
]
keywords = [
    "drone",
    "quadcopter",
    "pid",
    "simulation",
    "ziegler-nichols",
    "gyro",
    "trigonometry",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dronesim-drone = "dronesim.drone:main"
dronesim-trig = "dronesim.trig:main"
dronesim-wolfram = "dronesim.wolfram:main"

[tool.hatch.build.targets.wheel]
packages = ["dronesim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
