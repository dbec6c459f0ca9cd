"""
AudioQueue Managers - Derived views over the catalog.
"""
from .search import filter_entries, matches
from .stats import aggregate

__all__ = ['filter_entries', 'matches', 'aggregate']
