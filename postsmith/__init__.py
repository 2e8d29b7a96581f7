"""Postsmith - social post generation API with usage governance."""

__version__ = "0.5.0"
