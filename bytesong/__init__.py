"""BYTESONG — hash any byte stream into a plucked-string song."""

__version__ = "0.1.0"
