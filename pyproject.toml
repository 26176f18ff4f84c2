[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "watsc"
version = "0.1.0"
description = "Compiler for the small wats language that emits Bril JSON intermediate representation"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "bril", "ir", "lexer", "parser", "language"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
watsc = "watsc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["watsc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
