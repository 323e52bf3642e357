[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bigdatatools"
version = "0.1.0"
description = "File-based tools for large data: external integer sort, pipe-separated rows to JSON, a rotating multi-queue and a file-backed key-value store"
requires-python = ">=3.10"
dependencies = []
keywords = ["external sort", "merge sort", "csv", "json", "key-value store", "queue", "big data"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bigsort = "bigdatatools.sort_cli:main"
csv2json = "bigdatatools.csv2json_cli:main"
kvstore = "bigdatatools.kvstore_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bigdatatools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
