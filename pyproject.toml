[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "manybody_eth"
version = "0.1.0"
description = "Many-body Hilbert spaces, symmetry sectors and quasi-ETH measures for periodic lattice chains"
requires-python = ">=3.10"
keywords = [
    "quantum",
    "many-body",
    "exact diagonalization",
    "ETH",
    "Bose-Hubbard",
    "symmetry sectors",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
manybody-eth-show-hamiltonian = "manybody_eth.hubbard:main"

[tool.hatch.build.targets.wheel]
packages = ["manybody_eth"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
