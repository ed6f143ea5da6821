"""Savorist - restaurant discovery API and on-device preference cache."""

__version__ = "0.1.0"
