[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flashsim"
version = "0.1.0"
description = "Page-mapped flash translation layer simulator with greedy garbage collection and write-amplification reporting"
requires-python = ">=3.10"
dependencies = []
keywords = ["flash", "ftl", "ssd", "garbage-collection", "write-amplification", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
flashsim = "flashsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["flashsim"]

[tool.pytest.ini_options]
addopts = "-ra"
