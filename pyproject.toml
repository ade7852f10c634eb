[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "metrickit"
version = "0.1.0"
description = "Building blocks for metrics recorders: registries, handles, histograms, summaries and composable recorder layers."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "metrics",
    "telemetry",
    "histogram",
    "quantile",
    "ddsketch",
    "registry",
    "instrumentation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
metrickit-bucket-crusher = "metrickit.bucket_crusher:main"

[tool.hatch.build.targets.wheel]
packages = ["metrickit"]

[tool.hatch.build.targets.sdist]
include = [
    "metrickit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
