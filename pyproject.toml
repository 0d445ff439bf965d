[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "airsengine"
version = "0.1.0"
description = "Game-engine core: vector and plane geometry, keyframed motion blending, hierarchical mesh frames and 2D sprite objects"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["game", "animation", "keyframe", "quaternion", "geometry", "sprite", "mesh"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["airsengine"]

[tool.pytest.ini_options]
addopts = "-ra"
