[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hpcbasics"
version = "0.1.0"
description = "Small teaching tools for high-performance computing basics: binary layouts, call chains, heat-diffusion stencils, domain decomposition and spiral-ordered seeds"
requires-python = ">=3.10"
keywords = [
    "hpc",
    "education",
    "stencil",
    "heat-diffusion",
    "domain-decomposition",
    "binary-representation",
    "random-seeds",
    "mersenne-twister",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hpc-get-binary = "hpcbasics.binrepr:main"
hpc-call-chain = "hpcbasics.callchain:main"
hpc-arguments = "hpcbasics.arguments:main"
hpc-stencil = "hpcbasics.serial:main"
hpc-spiral = "hpcbasics.spiral:main"

[tool.hatch.build.targets.wheel]
packages = ["hpcbasics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
