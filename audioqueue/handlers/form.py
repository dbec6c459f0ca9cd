"""
Entry Form - Collects and validates input for a new catalog entry.
"""
import logging
from typing import Optional

from ..models import Entry
from ..api.catalog import CatalogStore
from ..config import CATEGORIES, STATUS_TO_LISTEN

logger = logging.getLogger(__name__)

EMPTY_FORM = {
    'title': '',
    'author': '',
    'duration': '',
    'category': '',
    'description': '',
    'cover_url': '',
    'audio': '',
}


class EntryForm:
    """Add-entry dialog state: open flag plus field values."""

    def __init__(self, store: CatalogStore):
        self.store = store
        self.is_open = False
        self.fields = dict(EMPTY_FORM)

    def open(self):
        self.is_open = True

    def close(self):
        """Hide the form. Field values are kept until submit or reset."""
        self.is_open = False

    def reset(self):
        self.fields = dict(EMPTY_FORM)

    def set_field(self, name: str, value: str):
        if name not in EMPTY_FORM:
            raise ValueError(f'Unknown form field: {name}')
        self.fields[name] = value if value is not None else ''

    def update(self, **fields):
        for name, value in fields.items():
            self.set_field(name, value)

    def submit(self) -> Optional[Entry]:
        """
        Add the entry if title and author are present.

        On rejection nothing is reported and the form stays as it was.
        On success the fields are cleared and the form closes.
        """
        normalized = normalize_fields(self.fields)
        if normalized is None:
            logger.debug('Form rejected: title and author are required')
            return None

        entry = self.store.add(normalized)
        self.reset()
        self.close()
        return entry


def normalize_fields(fields: dict) -> Optional[dict]:
    """Turn raw form values into store fields, or None if invalid."""
    title = (fields.get('title') or '').strip()
    author = (fields.get('author') or '').strip()
    if not title or not author:
        return None

    category = (fields.get('category') or '').strip()
    if category and category not in CATEGORIES:
        logger.warning(f'Unknown category {category!r}, leaving it empty')
        category = ''

    return {
        'title': title,
        'author': author,
        'duration': (fields.get('duration') or '').strip(),
        'category': category,
        'status': STATUS_TO_LISTEN,
        'description': (fields.get('description') or '').strip(),
        'cover_url': (fields.get('cover_url') or '').strip() or None,
        'audio': (fields.get('audio') or '').strip() or None,
    }
