[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "userbench"
version = "0.1.0"
description = "Benchmark binary search trees and hash tables on user records loaded from CSV"
requires-python = ">=3.10"
dependencies = []
keywords = ["benchmark", "binary-search-tree", "hash-table", "linear-probing", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["userbench"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
