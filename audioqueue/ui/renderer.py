"""
Text Renderer - Draws the library page as console text.
"""
import textwrap
from typing import List, Optional

from .context import RenderContext
from ..models import Entry, LibraryStats, PlaybackState
from ..config import APP_NAME, APP_TAGLINE, STATUS_LABELS, STATUS_TO_LISTEN, SCRUBBER_WIDTH
from ..utils import format_time

PLAY_GLYPH = '▶'
PAUSE_GLYPH = '❚❚'
DESCRIPTION_WIDTH = 72


class TextRenderer:
    """Renders a RenderContext to lines of text."""

    def __init__(self, width: int = DESCRIPTION_WIDTH):
        self.width = width

    def draw(self, ctx: RenderContext) -> str:
        lines = self.header()
        lines += self.stat_tiles(ctx.stats)
        lines.append('')
        lines += self.library(ctx)
        return '\n'.join(lines)

    def header(self) -> List[str]:
        title = f'{APP_NAME} - {APP_TAGLINE}'
        return [title, '=' * len(title)]

    def stat_tiles(self, stats: LibraryStats) -> List[str]:
        tiles = [
            ('Total Items', stats.total),
            ('To Listen', stats.to_listen),
            ('Currently Listening', stats.listening),
            ('Completed', stats.completed),
        ]
        return ['  |  '.join(f'{label}: {value}' for label, value in tiles)]

    def library(self, ctx: RenderContext) -> List[str]:
        count = len(ctx.entries)
        lines = [f'Your Library ({count} {"item" if count == 1 else "items"})', '']

        if not ctx.entries:
            return lines + self.empty_state(ctx.search_term)

        for number, entry in enumerate(ctx.entries, start=1):
            lines += self.card(
                number, entry,
                ctx.playback.get(entry.id),
                ctx.playable.get(entry.id, False),
            )
            lines.append('')
        return lines

    def empty_state(self, search_term: str) -> List[str]:
        if search_term:
            return ['No books found', 'Try adjusting your search terms']
        return [
            'No books in your library',
            'Add your first audiobook or podcast to get started (type "add")',
        ]

    def card(self, number: int, entry: Entry,
             state: Optional[PlaybackState] = None, playable: bool = False) -> List[str]:
        status = STATUS_LABELS.get(entry.status, STATUS_LABELS[STATUS_TO_LISTEN])
        lines = [f'{number:>2}. {entry.title}', f'    {entry.author}']

        if entry.description:
            lines += textwrap.wrap(entry.description, self.width,
                                   initial_indent='    ', subsequent_indent='    ')

        details = [f'⏱ {entry.duration}' if entry.duration else None,
                   f'[{entry.category}]' if entry.category else None,
                   f'<{status}>']
        lines.append('    ' + '  '.join(d for d in details if d))

        if playable and state is not None:
            lines.append('    ' + self.transport(state))
        return lines

    def transport(self, state: PlaybackState) -> str:
        glyph = PAUSE_GLYPH if state.is_playing else PLAY_GLYPH
        filled = int(round(state.progress * SCRUBBER_WIDTH))
        bar = '#' * filled + '-' * (SCRUBBER_WIDTH - filled)
        return (f'{glyph} [{bar}] '
                f'{format_time(state.current_time)} / {format_time(state.total_duration)}')
