"""Waffle chart aggregation and grid layout."""

__version__ = "0.3.0"
