"""FTSE 100 constituents scraper for londonstockexchange.com."""

__version__ = "1.0.0"
