[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "maybe_fut"
version = "0.1.0"
description = "Awaitable I/O and locking primitives usable both inside and outside an asyncio event loop"
requires-python = ">=3.11"
dependencies = []
keywords = [
    "async",
    "asyncio",
    "sync",
    "interop",
    "io",
    "buffered-io",
    "locks",
    "mutex",
    "rwlock",
    "barrier",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["maybe_fut"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
