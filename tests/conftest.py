"""
Pytest configuration and shared fixtures for AudioQueue tests.
"""
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from audioqueue.api.audio import AudioResource
from audioqueue.api.catalog import CatalogStore
from audioqueue.models import Entry


class FakeAudio(AudioResource):
    """Records commands instead of playing anything."""

    def __init__(self, duration: float = 120.0, loads: bool = True, fail_play: bool = False):
        super().__init__()
        self.duration = duration
        self.loads = loads
        self.fail_play = fail_play
        self.commands = []
        self._position = 0.0

    def load(self) -> bool:
        if not self.loads:
            return False
        self.available = True
        self.emit('loadedmetadata', self.duration)
        return True

    def play(self) -> bool:
        if self.fail_play:
            return False
        self.commands.append('play')
        return True

    def pause(self) -> bool:
        self.commands.append('pause')
        return True

    @property
    def current_time(self) -> float:
        return self._position

    @current_time.setter
    def current_time(self, value: float):
        self.commands.append(('seek', value))
        self._position = value


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that's cleaned up after each test."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_entries():
    """Provide a small catalog covering every status."""
    return [
        Entry(id='3', title='Dune', author='Frank Herbert', category='Fiction',
              status='listening', audio='dune.mp3'),
        Entry(id='2', title='Sapiens', author='Yuval Noah Harari', category='History',
              status='completed'),
        Entry(id='1', title='Hardcore History', author='Dan Carlin', category='Podcast',
              status='to-listen', audio='hh.mp3'),
    ]


@pytest.fixture
def store(sample_entries):
    return CatalogStore(sample_entries)


@pytest.fixture
def fake_audio_factory():
    """Factory handing out FakeAudio for entries with audio, keyed by entry id."""
    created = {}

    def factory(entry):
        audio = FakeAudio(loads=bool(entry.audio))
        created[entry.id] = audio
        return audio

    factory.created = created
    return factory
