"""Decoding of TOON text into Python values, JSON stream events and JSON text."""

__version__ = "0.1.1"