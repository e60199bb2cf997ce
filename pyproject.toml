[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pallet_kitchen"
version = "0.1.0"
description = "Small in-memory runtime modules with storage, origins, events and dispatchable calls."
requires-python = ">=3.10"
dependencies = []
keywords = ["runtime", "modules", "storage", "events", "currency", "crowdfund", "child-trie"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pallet_kitchen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
