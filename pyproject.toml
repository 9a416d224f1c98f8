[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dspvec"
version = "0.1.0"
description = "Fixed-size DSP vectors, projections, row operations, routing and window shapes for audio signal processing"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["dsp", "audio", "signal processing", "vector", "windowing", "interpolation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dspvec"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
