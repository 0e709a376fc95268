"""Storefront API - online ordering backend for a single restaurant"""

__version__ = "1.0.0"
