"""Command line interface for tracklet transformation."""

__all__ = ["main"]
