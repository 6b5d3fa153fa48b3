[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wasmforge"
version = "0.1.0"
description = "Build WebAssembly modules in memory, with stable tombstoned ids, and emit them as binaries."
requires-python = ">=3.10"
dependencies = []
keywords = ["webassembly", "wasm", "binary", "module", "emitter", "arena"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wasmforge"]

[tool.pytest.ini_options]
addopts = "-ra"
