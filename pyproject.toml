[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "numlabs"
version = "0.1.0"
description = "Small numerical-methods toolkit: dense and banded matrices, symmetric eigenvalues by the shifted QR algorithm, quadrature and vector normalisation experiments."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "linear algebra",
    "eigenvalues",
    "qr algorithm",
    "tridiagonal",
    "quadrature",
    "simpson",
    "trapezoid",
    "numerical methods",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
numlabs-eigen = "numlabs.eigen:main"
numlabs-power-sums = "numlabs.power_sums:main"
numlabs-simpson = "numlabs.simpson:main"
numlabs-normalize = "numlabs.normalize:main"
numlabs-adaptive = "numlabs.adaptive:main"
numlabs-trapezoid = "numlabs.trapezoid:main"
numlabs-records = "numlabs.records:main"

[tool.hatch.build.targets.wheel]
packages = ["numlabs"]

[tool.hatch.build.targets.sdist]
include = ["numlabs", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
