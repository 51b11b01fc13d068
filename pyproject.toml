[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "privfacility"
version = "0.1.0"
description = "Differentially private facility location: instance generation, private capacity assignment with reconnection, and benchmarks"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "facility location",
    "differential privacy",
    "laplace mechanism",
    "point process",
    "maximal independent set",
    "benchmark",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
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
test = [
    "pytest",
]

[project.scripts]
privfacility-pipeline = "privfacility.pipeline:main"
privfacility-size-benchmark = "privfacility.size_benchmark:main"
privfacility-gamma-benchmark = "privfacility.gamma_benchmark:main"
privfacility-clients-benchmark = "privfacility.clients_benchmark:main"
privfacility-delta-benchmark = "privfacility.delta:main"
privfacility-delta-pipeline = "privfacility.delta:pipeline_main"
privfacility-eps-benchmark = "privfacility.eps:main"
privfacility-eps-pipeline = "privfacility.eps:pipeline_main"
privfacility-real-world = "privfacility.real_world:main"
privfacility-prep-data = "privfacility.real_world:prep_main"

[tool.hatch.build.targets.wheel]
packages = ["privfacility"]

[tool.hatch.build.targets.sdist]
include = [
    "privfacility",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
