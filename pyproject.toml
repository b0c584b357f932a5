[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsontree"
version = "1.5.5"
description = "A small JSON document tree: parse, build, edit, compare, print and minify JSON values."
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "parser", "printer", "tree", "minify"]
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
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsontree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
