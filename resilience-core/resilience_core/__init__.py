"""Resilience and runtime-compatibility layer of the kids' money app client."""

__version__ = "0.1.0"
