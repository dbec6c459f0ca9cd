"""
Render Context - Bundles all state needed for rendering.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from ..models import Entry, LibraryStats, PlaybackState


@dataclass
class RenderContext:
    """All state needed to render the library page."""
    entries: List[Entry]          # Visible (filtered) entries
    stats: LibraryStats           # Counts over the whole catalog
    search_term: str
    playback: Dict[str, PlaybackState] = field(default_factory=dict)
    playable: Dict[str, bool] = field(default_factory=dict)
