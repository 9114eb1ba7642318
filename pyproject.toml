[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hexrecon"
version = "0.1.0"
description = "Step-by-step reconstruction of hexahedral meshes from constrained point sets, with a 3D viewer"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "matplotlib",
]
keywords = ["mesh", "hexahedron", "reconstruction", "point cloud", "visualization"]
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
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hexrecon = "hexrecon.app:main"

[tool.hatch.build.targets.wheel]
packages = ["hexrecon"]

[tool.pytest.ini_options]
addopts = "-ra"
