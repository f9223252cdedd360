[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelgate"
version = "0.1.0"
description = "A small 2D pixel-art game layer: sprite atlas packing, sprite rendering, audio and input on pygame"
requires-python = ">=3.10"
keywords = ["game", "pixel-art", "sprites", "atlas", "pygame", "2d"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: pygame",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pixelgate-pack = "pixelgate.asset_packer:main"
pixelgate-tower = "pixelgate.tower:main"

[tool.hatch.build.targets.wheel]
packages = ["pixelgate"]

[tool.hatch.build.targets.sdist]
include = [
    "pixelgate",
    "tests",
]

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
