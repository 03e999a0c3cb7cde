[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "toonkit"
version = "0.1.1"
description = "Decoder for TOON (Token-Oriented Object Notation) into Python values, JSON stream events and JSON text"
requires-python = ">=3.10"
dependencies = []
keywords = ["toon", "json", "serialization", "decoder", "llm", "streaming"]
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
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["toonkit"]

[tool.hatch.build.targets.sdist]
include = ["toonkit", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
