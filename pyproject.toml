[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phpcomposer"
version = "0.1.0"
description = "Run PHP Composer commands from Python and edit a project's composer.json."
requires-python = ">=3.10"
dependencies = []
keywords = ["php", "composer", "dependency-management", "composer.json", "audit"]
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
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["phpcomposer"]

[tool.pytest.ini_options]
addopts = "-ra"
