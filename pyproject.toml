[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "memsim"
version = "0.1.0"
description = "Multi-threaded virtual memory simulator with paging, TLB, frame eviction and segmentation"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual memory", "paging", "tlb", "segmentation", "simulator", "operating systems"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
memsim = "memsim.simulator:main"

[tool.hatch.build.targets.wheel]
packages = ["memsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
