[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rushsprite"
version = "1.0.0"
description = "Read paletted sprite chunks, compose their frames on an RGBA canvas and save them as PNG images"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["sprite", "palette", "rgb565", "png", "animation", "chunk"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rushsprite-color = "rushsprite.color:main"
angkor-grass = "rushsprite.angkor:main"

[tool.hatch.build.targets.wheel]
packages = ["rushsprite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
