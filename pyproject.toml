[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softtouch"
version = "0.0.1"
description = "A soft-touch MIDI controller model: encoder, buttons and a segment LCD driving MIDI control-change messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["midi", "controller", "control-change", "encoder", "segment-lcd", "simulation"]
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
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
softtouch = "softtouch.app:main"

[tool.hatch.build.targets.wheel]
packages = ["softtouch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
