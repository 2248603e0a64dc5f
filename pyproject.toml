[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "availprim"
version = "0.1.0"
description = "Data-availability chain primitives: compact binary codec, headers with Kate commitments, app-specific extrinsics and offchain signing helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "scale-codec", "data-availability", "kate", "extrinsic", "header"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["availprim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
