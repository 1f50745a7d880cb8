[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "libdesk"
version = "0.1.0"
description = "A console library desk: staff accounts, books, members, loans, returns and fines kept in CSV files."
requires-python = ">=3.10"
dependencies = []
keywords = ["library", "books", "members", "lending", "fines", "csv"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
libdesk = "libdesk.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["libdesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
