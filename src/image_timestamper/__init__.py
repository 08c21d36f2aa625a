"""Stamp an image file's modification time onto the image."""

__version__ = "0.1.0"
