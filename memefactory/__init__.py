"""Trend-to-meme video service."""

__version__ = "0.1.0"
