[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowerblur"
version = "0.1.0"
description = "Multi-scale box blur and difference-of-blur filtering for binary PPM images, with a result checker"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ppm", "image", "blur", "box-filter", "difference-of-blur"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
flowerblur = "flowerblur.pipeline:main"
flowerblur-check = "flowerblur.checker:main"

[tool.hatch.build.targets.wheel]
packages = ["flowerblur"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
