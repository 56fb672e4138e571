[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "elderframe"
version = "0.1.0"
description = "Entropy measures, tensor algebra, losses, field models, orbital mechanics and text diffs for Elder/Mentor/Erudite hierarchies"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tensor",
    "entropy",
    "loss",
    "orbital mechanics",
    "diff",
    "phase fields",
    "hierarchy",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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

[tool.hatch.build.targets.wheel]
packages = ["elderframe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
