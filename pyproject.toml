[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ripmail"
version = "0.1.15"
description = "Building blocks for taking MIME mail apart: line reader, boundary stack, decoders, filename filters and a small logger"
requires-python = ">=3.10"
dependencies = []
keywords = ["mime", "email", "quoted-printable", "base64", "rfc2047", "attachments"]
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
    "Topic :: Communications :: Email :: Filters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ripmail"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
