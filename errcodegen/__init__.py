"""Discover error code constants and generate registration modules and Markdown docs."""

__version__ = "0.1.0"