"""Chesstable — physical chess table: pick up, drag and drop pieces
against a python-chess rules oracle."""

__version__ = "0.1.0"
