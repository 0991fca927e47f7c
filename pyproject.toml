[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imganalysis"
version = "1.0.0"
description = "Texture (GLCM inverse difference moment) and shape (maximum diameter) analysis of grayscale images"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "pillow",
]
keywords = ["image analysis", "glcm", "texture", "idm", "otsu", "contour", "diameter", "circularity"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
imganalysis = "imganalysis.cli:main"
imganalysis-samples = "imganalysis.samples:main"

[tool.hatch.build.targets.wheel]
packages = ["imganalysis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
