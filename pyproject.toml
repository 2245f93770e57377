[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "noffkit"
version = "0.1.0"
description = "Convert MIPS COFF executables to the NOFF object format and model the kernel pieces that load and schedule NOFF programs"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "coff",
    "noff",
    "mips",
    "object-file",
    "operating-system",
    "address-space",
    "scheduler",
    "semaphore",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
noffkit-convert = "noffkit.convert:main"

[tool.hatch.build.targets.wheel]
packages = ["noffkit"]

[tool.hatch.build.targets.sdist]
include = ["noffkit", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
