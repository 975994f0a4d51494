[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vectorpad"
version = "0.1.0"
description = "Pre-flight analysis of natural-language directives: missing constraints, scope mismatches, pressure scoring, token metrics, an Oracul client and a flight log."
requires-python = ">=3.10"
dependencies = []
keywords = ["directives", "prompts", "preflight", "linting", "text-analysis"]
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
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vectorpad"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
