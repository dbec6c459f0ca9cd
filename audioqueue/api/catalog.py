"""
Catalog Store - The ordered collection of library entries.

Handles:
- Adding entries (newest first, unique time-based ids)
- Listing entries
- Change notification for derived views
"""
import time
import logging
from typing import Callable, Iterable, List, Optional

from ..models import Entry
from ..config import STATUSES, STATUS_TO_LISTEN

logger = logging.getLogger(__name__)

_ENTRY_FIELDS = ('title', 'author', 'duration', 'category', 'status',
                 'description', 'cover_url', 'audio')


class CatalogStore:
    """
    Single source of truth for the session's catalog.

    The collection is only ever replaced as a whole, so readers never see a
    partially applied change. There is no update or remove.
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._entries: List[Entry] = list(entries or [])
        ids = [entry.id for entry in self._entries]
        if len(set(ids)) != len(ids):
            raise ValueError('Duplicate entry ids in initial catalog')

        self._listeners: List[Callable[[], None]] = []
        self._last_id = 0
        self.version = 0

    @classmethod
    def with_samples(cls) -> 'CatalogStore':
        """Create a store seeded with the starter library."""
        return cls(_sample_entries())

    # ============================================
    # READ
    # ============================================

    def list(self) -> List[Entry]:
        """Get entries, newest first."""
        return list(self._entries)

    @property
    def items(self) -> List[Entry]:
        return self.list()

    def get(self, entry_id: str) -> Optional[Entry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    # ============================================
    # WRITE
    # ============================================

    def add(self, fields: dict) -> Entry:
        """
        Create an entry from fields (everything but the id) and prepend it.

        Raises ValueError for missing title/author, unknown fields or an
        unknown status.
        """
        unknown = set(fields) - set(_ENTRY_FIELDS)
        if unknown:
            raise ValueError(f'Unknown entry fields: {sorted(unknown)}')

        title = fields.get('title') or ''
        author = fields.get('author') or ''
        if not title.strip() or not author.strip():
            raise ValueError('Entry requires a title and an author')

        status = fields.get('status') or STATUS_TO_LISTEN
        if status not in STATUSES:
            raise ValueError(f'Unknown status: {status!r}')

        entry = Entry(
            id=self._next_id(),
            title=title,
            author=author,
            duration=fields.get('duration') or '',
            category=fields.get('category') or '',
            status=status,
            description=fields.get('description') or '',
            cover_url=fields.get('cover_url') or None,
            audio=fields.get('audio') or None,
        )

        self._entries = [entry] + self._entries
        self.version += 1
        logger.info(f'Added entry {entry.id}: {entry.title!r} by {entry.author!r}')
        self._notify()
        return entry

    def _next_id(self) -> str:
        """Millisecond timestamp, bumped to stay increasing and unused."""
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        existing = {entry.id for entry in self._entries}
        while str(candidate) in existing:
            candidate += 1
        self._last_id = candidate
        return str(candidate)

    # ============================================
    # CHANGE NOTIFICATION
    # ============================================

    def subscribe(self, callback: Callable[[], None]):
        """Call callback after every catalog change."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in list(self._listeners):
            callback()


def _sample_entries() -> List[Entry]:
    """Starter library shown on first launch."""
    return [
        Entry(
            id='1', title='Alchemist', author='Paul Coelho',
            duration='5h 35m', category='Self-Help', status='to-listen',
            description='Follow your dreams, and the universe will conspire to help you.',
            audio='alchemist.mp3',
        ),
        Entry(
            id='2', title='The Psychology of Money', author='Morgan Housel',
            duration='5h 39m', category='Business', status='listening',
            description='Timeless lessons on wealth, greed, and happiness. How to think '
                        'about money and make better financial decisions.',
        ),
        Entry(
            id='3', title='Sapiens', author='Yuval Noah Harari',
            duration='15h 17m', category='History', status='completed',
            description='A Brief History of Humankind. How humans came to dominate the '
                        'planet and what that means for our future.',
        ),
        Entry(
            id='4', title='The Joe Rogan Experience', author='Joe Rogan',
            duration='2h 45m', category='Podcast', status='to-listen',
            description='Long-form conversations with fascinating guests from all walks '
                        'of life. Deep dives into topics that matter.',
        ),
        Entry(
            id='5', title='Design Better', author='Aarron Walter & Eli Woolery',
            duration='4h 12m', category='Technology', status='to-listen',
            description='A guide to human-centered design and the principles that drive '
                        'great user experiences.',
        ),
    ]
