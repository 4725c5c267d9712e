"""Stock portfolio tracker backend."""

__version__ = "0.1.0"
