[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hevtasks"
version = "0.1.0"
description = "Intrusive red-black trees, reference-counted objects and pluggable memory allocators"
requires-python = ">=3.10"
dependencies = []
keywords = ["rbtree", "red-black tree", "allocator", "slab", "reference counting"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hevtasks"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
