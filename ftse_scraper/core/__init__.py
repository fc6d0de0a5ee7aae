# ftse_scraper/core/__init__.py
"""Core scraper components."""

from .config import ScraperConfig
from .statistics import MarketCapStats, compute_market_cap_stats

__all__ = [
    'ScraperConfig',
    'MarketCapStats',
    'compute_market_cap_stats'
]
