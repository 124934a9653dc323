[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gurk"
version = "0.7.1"
description = "Core of a terminal Signal messenger client: data model, message storage, attachments and name resolution"
requires-python = ">=3.10"
keywords = ["signal", "tui", "chat", "messenger", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Typing :: Typed",
]
dependencies = [
    "wcwidth",
    "markdown-it-py",
    "semver",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gurk-changelog = "gurk.changelog:main"

[tool.hatch.build.targets.wheel]
packages = ["gurk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
