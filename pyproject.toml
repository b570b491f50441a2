[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fluentcfg"
version = "0.1.0"
description = "Render Fluent Bit configuration text from declarative input, filter, output and parser resources"
requires-python = ">=3.10"
dependencies = []
keywords = ["fluent-bit", "logging", "configuration", "kubernetes", "pipeline"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fluentcfg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
