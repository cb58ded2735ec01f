[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "emilia3d"
version = "0.1.0"
description = "Building blocks for a 3D pinball engine: meshes, collision bounds and tests, vertex lighting, text menus and configuration."
requires-python = ">=3.10"
dependencies = []
keywords = ["pinball", "3d", "collision", "mesh", "game-engine", "octree", "lighting", "menu"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["emilia3d"]

[tool.hatch.build.targets.sdist]
include = ["emilia3d", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
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
