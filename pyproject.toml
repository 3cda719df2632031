[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "toycc"
version = "0.1.0"
description = "A small three-stage front end for a C subset: lexer, parse-tree printer and semantic checker"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "lexer", "parser", "semantic analysis", "symbol table", "c", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
toycc-lex = "toycc.lexer:main"
toycc-parse = "toycc.parser:main"
toycc-check = "toycc.semantic:main"

[tool.hatch.build.targets.wheel]
packages = ["toycc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
