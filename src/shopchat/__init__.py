"""Conversational front-end for a product catalog."""

__version__ = "0.1.0"
