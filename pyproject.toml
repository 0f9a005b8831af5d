[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rxhash"
version = "0.1.0"
description = "Pure-Python Blake2b, Argon2 memory filling and AES-based hashing primitives for a memory-hard proof-of-work hash"
requires-python = ">=3.10"
dependencies = []
keywords = ["blake2b", "argon2", "blamka", "aes", "hash", "proof-of-work"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["rxhash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
