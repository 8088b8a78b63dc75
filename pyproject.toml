[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "intrusive-rbtree"
version = "0.1.0"
description = "A red-black tree that indexes your own objects by a key, with duplicate detection and in-place replacement."
requires-python = ">=3.10"
dependencies = []
keywords = ["red-black tree", "balanced tree", "binary search tree", "index", "data structure"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["intrusive_rbtree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
