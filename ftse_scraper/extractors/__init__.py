# ftse_scraper/extractors/__init__.py
"""Data extractors."""

from .table_extractor import ConstituentsTable, Constituent, MarketCapEntry, TableRow

__all__ = ['ConstituentsTable', 'Constituent', 'MarketCapEntry', 'TableRow']
