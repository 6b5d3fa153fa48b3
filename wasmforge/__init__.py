"""Build WebAssembly modules in memory with stable, tombstoned ids and emit them as binaries."""

__version__ = "0.1.0"