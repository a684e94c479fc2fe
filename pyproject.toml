[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xsubkit"
version = "0.1.0"
description = "Read, write and render timed image subtitles stored in the xsub container format"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["subtitles", "xsub", "image subtitles", "overlay", "video"]
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
    "Topic :: Multimedia :: Video :: Display",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["xsubkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
