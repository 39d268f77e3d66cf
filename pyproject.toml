[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "quillasm"
version = "0.1.0"
description = "Macro expansion, first-pass analysis and word encoding for a 14-bit teaching machine's assembly language"
requires-python = ">=3.10"
dependencies = []
keywords = ["assembler", "macro", "symbol-table", "14-bit", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Assemblers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["quillasm*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
