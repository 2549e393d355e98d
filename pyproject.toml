[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nexus_prover"
version = "0.10.4"
description = "Prover node client pieces: tasks, task cache, version constraint checks, fetch backoff and system measurements"
requires-python = ">=3.10"
keywords = ["prover", "zero-knowledge", "version-check", "backoff", "distributed"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]
dependencies = [
    "httpx",
    "semver",
    "pycryptodome",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
nexus-fib = "nexus_prover.fib:main"

[tool.hatch.build.targets.wheel]
packages = ["nexus_prover"]

[tool.pytest.ini_options]
addopts = "-ra"
