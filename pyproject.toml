[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assetprep"
version = "0.1.0"
description = "Convert PNG textures and OBJ meshes into compact GPU-ready binary blobs with generated Rust wrappers"
requires-python = ">=3.10"
keywords = ["assets", "textures", "meshes", "obj", "png", "quantization", "firmware", "gpu"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
asset-prep = "assetprep.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["assetprep"]

[tool.pytest.ini_options]
addopts = "-ra"
