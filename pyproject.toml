[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ternarydpf"
version = "0.1.0"
description = "Distributed point functions over ternary and base-k trees with full-domain evaluation"
requires-python = ">=3.10"
keywords = ["dpf", "distributed point function", "function secret sharing", "cryptography", "mpc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ternarydpf = "ternarydpf.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ternarydpf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
