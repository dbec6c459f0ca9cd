"""
Stats - Status counts for the stat tiles.
"""
from typing import Iterable

from ..models import Entry, LibraryStats
from ..config import STATUS_TO_LISTEN, STATUS_LISTENING, STATUS_COMPLETED


def aggregate(entries: Iterable[Entry]) -> LibraryStats:
    """Count entries per status. The three counts always sum to total."""
    stats = LibraryStats()
    for entry in entries:
        stats.total += 1
        if entry.status == STATUS_LISTENING:
            stats.listening += 1
        elif entry.status == STATUS_COMPLETED:
            stats.completed += 1
        elif entry.status == STATUS_TO_LISTEN:
            stats.to_listen += 1
        else:
            raise ValueError(f'Entry {entry.id} has unknown status {entry.status!r}')
    return stats
