[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "motor"
version = "0.1.0"
description = "A small content-addressed version control system with branches, tags and a staging index"
requires-python = ">=3.10"
dependencies = []
keywords = ["version-control", "vcs", "repository", "commit", "branch", "tag"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
motor = "motor.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["motor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
