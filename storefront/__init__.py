"""Storefront backend: AI product recommendations and bundle merchandising."""

__version__ = "0.1.0"
