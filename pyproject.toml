[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "appfolders"
version = "0.1.0"
description = "Application data folders, monitored JSON files, rotating JSON logs and component configuration files"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "configuration", "logging", "backup", "json", "app data"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Logging",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["appfolders"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
