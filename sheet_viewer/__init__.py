"""Render spreadsheet sheets in the terminal or as JSON."""

__version__ = "0.1.0"
