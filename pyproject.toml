[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jsonapi"
version = "0.1.0"
description = "Schemas, soft resources, URL parsing and payload reading for JSON:API"
requires-python = ">=3.10"
dependencies = []
keywords = ["jsonapi", "json", "api", "schema", "rest", "url"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jsonapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
