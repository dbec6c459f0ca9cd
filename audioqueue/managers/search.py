"""
Search - Free-text filtering of the catalog.
"""
from typing import Iterable, List

from ..models import Entry


def matches(entry: Entry, query: str) -> bool:
    """Case-insensitive substring match on title, author or category."""
    needle = query.lower()
    return (
        needle in entry.title.lower()
        or needle in entry.author.lower()
        or needle in entry.category.lower()
    )


def filter_entries(entries: Iterable[Entry], query: str) -> List[Entry]:
    """Entries matching query, in input order. An empty query keeps everything."""
    if not query:
        return list(entries)
    return [entry for entry in entries if matches(entry, query)]
