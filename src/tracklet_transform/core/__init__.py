"""Core module with constants, types, units, frames, config, and utilities."""

__all__ = [
    "constants",
    "types",
    "units",
    "frames",
    "errors",
    "logging",
    "config",
]
