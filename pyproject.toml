[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ttkkit"
version = "2.8.0"
description = "Application toolkit: XXTEA string cipher, command-line options, XML documents, file locks, single-instance peers, signal dumps and window geometry helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "xxtea",
    "base64",
    "command-line",
    "xml",
    "single-instance",
    "file-lock",
    "toolkit",
]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ttkkit"]

[tool.hatch.build.targets.sdist]
include = ["ttkkit", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
