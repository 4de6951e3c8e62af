"""Descriptive analytics over a star-schema sales warehouse."""

__version__ = "0.1.0"
