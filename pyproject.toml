[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gitloom"
version = "0.1.0"
description = "Commit planning rules, review output and a repository health check for semantic Git commits"
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "commit", "conventional-commits", "semantic", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gitloom = "gitloom.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gitloom"]

[tool.pytest.ini_options]
addopts = "-ra"
