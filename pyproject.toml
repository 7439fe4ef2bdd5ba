[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "composer-blueprints"
version = "35.9"
description = "Blueprint commands for an image-builder composer server: list, show, push, save, freeze, depsolve, diff and more"
requires-python = ">=3.11"
dependencies = []
keywords = ["blueprint", "composer", "image-builder", "toml", "weldr"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["composer_blueprints"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
