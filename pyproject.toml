[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voicebot"
version = "0.1.0"
description = "Voice toolkit pieces for a service robot: voice activity detection, a JSON value model with writers and paths, and wake-phrase checks."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "robot",
    "speech",
    "voice",
    "vad",
    "json",
    "wake-word",
]
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
    "Topic :: Multimedia :: Sound/Audio :: Speech",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voicebot"]

[tool.hatch.build.targets.sdist]
include = ["voicebot", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
