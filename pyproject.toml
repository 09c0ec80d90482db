[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "errcodegen"
version = "0.1.0"
description = "Generate error code registration modules and Markdown documentation from error code constant definitions."
requires-python = ">=3.10"
dependencies = []
keywords = ["error codes", "code generation", "documentation", "http status"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
errcodegen = "errcodegen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["errcodegen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
