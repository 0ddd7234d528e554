[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rcpufetch"
version = "0.0.3"
description = "A simple cross-platform command-line tool for reading CPU information."
requires-python = ">=3.10"
dependencies = []
keywords = ["cpu", "system-info", "hardware", "cli-tools", "cross-platform"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Operating System :: MacOS",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rcpufetch = "rcpufetch.app:main"

[tool.hatch.build.targets.wheel]
packages = ["rcpufetch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
