[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "myopicbot"
version = "0.1.0"
description = "Building blocks for a Lichess chess bot: account and game event parsing, the event stream, an API client, clock management, opening-book move choice and PGN move-text extraction."
requires-python = ">=3.10"
keywords = ["chess", "lichess", "bot", "pgn", "openings", "time-management"]
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
    "Framework :: AsyncIO",
    "Typing :: Typed",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["myopicbot"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
