"""Property intake and region assignment backend."""

__version__ = "0.1.0"
