"""Cookly: fridge inventory tracking and recipe discovery."""

__version__ = "0.1.0"
