"""Inventory bags, config decoding and shared helpers for game servers."""

__version__ = "0.1.0"