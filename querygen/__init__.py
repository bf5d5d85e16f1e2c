"""Core building blocks for generating typed query code."""

__version__ = "0.1.0"