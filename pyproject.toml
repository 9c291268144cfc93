[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dwtools"
version = "0.1.0"
description = "Building blocks for reading DWARF and CTF debugging information: CTF encodings, bit helpers, string lists, LEB128, DIE offset hashing and struct member layout."
requires-python = ">=3.10"
dependencies = []
keywords = ["dwarf", "ctf", "debug-info", "leb128", "bitfields", "struct-layout"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Debuggers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dwtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
