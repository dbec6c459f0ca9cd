"""
AudioQueue Application - Library session and console loop.
"""
import logging
from pathlib import Path
from typing import Callable, List, Optional

from .config import (
    CATEGORIES, COVERS_DIR, EMPTY_LIBRARY, MOCK_MODE, MOCK_AUDIO_DURATION,
)
from .models import Entry, LibraryStats
from .api import CatalogStore, AudioResource, NullAudio, PygameAudio, SimulatedAudio, shutdown_audio
from .managers import filter_entries, aggregate
from .controllers import PlayerRegistry
from .handlers import EntryForm, Command, CommandError, parse_command
from .handlers.commands import help_lines
from .ui import CoverCache, TextRenderer, RenderContext
from .utils import resolve_audio_path, format_time

logger = logging.getLogger(__name__)

# (field, prompt) pairs asked by the console 'add' command
FORM_PROMPTS = [
    ('title', 'Title'),
    ('author', 'Author/Host'),
    ('duration', 'Duration (e.g. 8h 30m)'),
    ('category', f'Category ({", ".join(CATEGORIES)})'),
    ('description', 'Description'),
    ('cover_url', 'Cover image (path or URL)'),
    ('audio', 'Audio file'),
]


class AudioQueue:
    """
    One listening-library session.

    Owns the catalog store, the search term, the add-entry form and the
    mounted players. Filtered entries and stats are derived on demand.
    """

    def __init__(self,
                 store: Optional[CatalogStore] = None,
                 audio_factory: Optional[Callable[[Entry], AudioResource]] = None,
                 covers: Optional[CoverCache] = None,
                 output: Callable[[str], None] = print,
                 mock_mode: bool = MOCK_MODE):
        if store is None:
            store = CatalogStore() if EMPTY_LIBRARY else CatalogStore.with_samples()
        self.store = store
        self.mock_mode = mock_mode
        self.search_term = ''
        self.form = EntryForm(store)
        self.players = PlayerRegistry(audio_factory or self._create_audio)
        self.covers = covers or CoverCache(COVERS_DIR)
        self.renderer = TextRenderer()
        self.output = output
        self.running = False

        self._filtered = None  # ((store version, search term), entries)

        self.store.subscribe(self._on_catalog_change)
        self._sync_players()

    def _create_audio(self, entry: Entry) -> AudioResource:
        if not entry.audio:
            return NullAudio()
        if self.mock_mode:
            return SimulatedAudio(MOCK_AUDIO_DURATION)
        return PygameAudio(resolve_audio_path(entry.audio))

    # ============================================
    # DERIVED VIEWS
    # ============================================

    @property
    def visible_entries(self) -> List[Entry]:
        """Catalog filtered by the search term (recomputed on any change)."""
        key = (self.store.version, self.search_term)
        if self._filtered is None or self._filtered[0] != key:
            self._filtered = (key, filter_entries(self.store.list(), self.search_term))
        return list(self._filtered[1])

    @property
    def stats(self) -> LibraryStats:
        return aggregate(self.store.list())

    def render_context(self) -> RenderContext:
        entries = self.visible_entries
        playback = {}
        playable = {}
        for entry in entries:
            player = self.players.get(entry.id)
            if player is not None:
                playback[entry.id] = player.state
                playable[entry.id] = player.can_play
        return RenderContext(
            entries=entries,
            stats=self.stats,
            search_term=self.search_term,
            playback=playback,
            playable=playable,
        )

    def render(self) -> str:
        return self.renderer.draw(self.render_context())

    # ============================================
    # ACTIONS
    # ============================================

    def set_search(self, term: str):
        self.search_term = term
        self._sync_players()

    def add_entry(self, **fields) -> Optional[Entry]:
        """Fill and submit the add form. Returns None if rejected."""
        self.form.open()
        self.form.update(**fields)
        return self.form.submit()

    def entry_at(self, index: int) -> Optional[Entry]:
        entries = self.visible_entries
        if 0 <= index < len(entries):
            return entries[index]
        return None

    def toggle(self, index: int) -> bool:
        entry = self.entry_at(index)
        if entry is None:
            return False
        return self.players.toggle(entry.id)

    def seek(self, index: int, time: float) -> Optional[float]:
        entry = self.entry_at(index)
        if entry is None:
            return None
        return self.players.seek(entry.id, time)

    def _on_catalog_change(self):
        self._sync_players()

    def _sync_players(self):
        """Players exist only for visible entries, like rendered cards."""
        self.players.sync(self.visible_entries)

    # ============================================
    # CONSOLE
    # ============================================

    def run(self, read_line: Callable[[str], str] = input):
        """Read commands until quit or end of input."""
        self.running = True
        self.output(self.render())
        self.output('')
        self.output('Type "help" for commands.')

        while self.running:
            try:
                line = read_line('> ')
            except (EOFError, KeyboardInterrupt):
                break

            self.players.poll()

            try:
                command = parse_command(line)
            except CommandError as e:
                self.output(str(e))
                continue

            if command is None:
                self.output(self.render())
                continue

            self.handle(command, read_line)

        self.shutdown()

    def handle(self, command: Command, read_line: Callable[[str], str] = input):
        name = command.name

        if name == 'quit':
            self.running = False
            return

        if name == 'help':
            for line in help_lines():
                self.output(line)
            return

        if name == 'stats':
            for line in self.renderer.stat_tiles(self.stats):
                self.output(line)
            return

        if name == 'search':
            self.set_search(command.args[0] if command.args else '')
        elif name == 'add':
            self._prompt_form(read_line)
        elif name in ('play', 'seek', 'cover'):
            entry = self.entry_at(command.index)
            if entry is None:
                self.output(f'No item {command.index + 1}')
                return
            if name == 'play':
                self.players.toggle(entry.id)
            elif name == 'seek':
                position = self.players.seek(entry.id, command.time)
                logger.debug(f'Seek {entry.title!r} to {format_time(position or 0)}')
            else:
                self._export_cover(entry, Path(command.args[1]))
                return

        self.output(self.render())

    def _prompt_form(self, read_line: Callable[[str], str]):
        """Ask for each form field; Enter keeps the current value."""
        self.form.open()
        for name, label in FORM_PROMPTS:
            current = self.form.fields[name]
            prompt = f'{label} [{current}]: ' if current else f'{label}: '
            try:
                value = read_line(prompt)
            except (EOFError, KeyboardInterrupt):
                self.form.close()
                return
            if value.strip():
                self.form.set_field(name, value)
        self.form.submit()

    def _export_cover(self, entry: Entry, dest: Path):
        try:
            path = self.covers.export(entry, dest)
        except OSError as e:
            logger.warning(f'Cannot save cover to {dest}: {e}')
            self.output(f'Cannot save cover: {e}')
            return
        self.output(f'Saved cover to {path}')

    def shutdown(self):
        logger.info('Shutting down...')
        self.running = False
        self.players.clear()
        self.store.unsubscribe(self._on_catalog_change)
        shutdown_audio()
