"""Grocery list backend: categories, ordered entries and a demo reset job."""

__version__ = "0.1.0"
