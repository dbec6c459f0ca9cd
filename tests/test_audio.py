"""
Tests for PygameAudio - mixer commands, soft failures, notifications.
"""
import pytest
from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

import mutagen
import pygame

from audioqueue.api import audio as audio_module
from audioqueue.api.audio import AudioResource, PygameAudio
from audioqueue.controllers import PlayerRegistry
from audioqueue.models import Entry


@pytest.fixture
def audio_file(temp_dir):
    path = temp_dir / 'book.ogg'
    path.write_bytes(b'fake')
    return path


@pytest.fixture(autouse=True)
def fresh_durations():
    audio_module._durations.clear()
    yield
    audio_module._durations.clear()


@pytest.fixture
def mixer():
    """Patch pygame.mixer so no sound device is needed."""
    with patch('audioqueue.api.audio.pygame.mixer') as mock_mixer:
        mock_mixer.get_init.return_value = (44100, -16, 2)
        mock_mixer.music.get_pos.return_value = 0
        mock_mixer.music.get_busy.return_value = True
        yield mock_mixer


@pytest.fixture
def tags():
    """Patch mutagen so the fake file reports a 90 second length."""
    with patch('audioqueue.api.audio.mutagen.File') as mock_file:
        mock_file.return_value.info.length = 90.0
        yield mock_file


class TestEvents:
    """Tests for the notification plumbing."""

    def test_unknown_event_rejected(self):
        with pytest.raises(ValueError):
            AudioResource().on('volumechange', lambda: None)

    def test_off_removes_listener(self):
        calls = []
        resource = AudioResource()
        resource.on('ended', calls.append)
        resource.off('ended', calls.append)
        resource.emit('ended', 'x')
        assert calls == []


class TestLoad:
    """Tests for loading media."""

    def test_missing_file_is_unavailable(self, temp_dir):
        audio = PygameAudio(temp_dir / 'missing.mp3')
        assert audio.load() is False
        assert audio.available is False
        assert audio.play() is False

    def test_load_reports_duration(self, audio_file, mixer, tags):
        durations = []
        audio = PygameAudio(audio_file)
        audio.on('loadedmetadata', durations.append)

        assert audio.load() is True
        assert durations == [90.0]

    def test_corrupt_file_is_unavailable(self, audio_file, mixer, tags):
        tags.side_effect = mutagen.MutagenError('bad header')
        audio = PygameAudio(audio_file)
        assert audio.load() is False
        assert audio.available is False

    def test_unrecognized_format_is_unavailable(self, audio_file, mixer, tags):
        tags.return_value = None
        assert PygameAudio(audio_file).load() is False

    def test_load_does_not_decode_samples(self, audio_file, mixer, tags):
        """Length comes from the file headers; the mixer is untouched until play."""
        PygameAudio(audio_file).load()
        mixer.Sound.assert_not_called()
        mixer.init.assert_not_called()

    def test_duration_read_once_per_file(self, audio_file, mixer, tags):
        PygameAudio(audio_file).load()
        PygameAudio(audio_file).load()
        assert tags.call_count == 1

    def test_changed_file_is_read_again(self, audio_file, mixer, tags):
        PygameAudio(audio_file).load()
        audio_file.write_bytes(b'longer fake')
        PygameAudio(audio_file).load()
        assert tags.call_count == 2

    def test_remounting_players_reuses_duration(self, audio_file, mixer, tags):
        """Search changes unmount and remount players without rereading files."""
        entry = Entry(id='1', title='Book', author='A', audio=audio_file.name)
        registry = PlayerRegistry(lambda e: PygameAudio(audio_file))

        for visible in ([entry], [], [entry], [], [entry]):
            registry.sync(visible)

        assert tags.call_count == 1
        assert registry.get('1').state.total_duration == 90.0


class TestTransport:
    """Tests for play/pause/seek against the mixer."""

    def test_play_loads_and_starts_at_offset(self, audio_file, mixer, tags):
        audio = PygameAudio(audio_file)
        audio.load()

        assert audio.play() is True
        mixer.music.load.assert_called_with(str(audio_file))
        mixer.music.play.assert_called_with(start=0.0)

    def test_pause_remembers_position(self, audio_file, mixer, tags):
        audio = PygameAudio(audio_file)
        audio.load()
        audio.play()
        mixer.music.get_pos.return_value = 12500

        assert audio.pause() is True
        assert audio.current_time == 12.5
        mixer.music.stop.assert_called_once()

        audio.play()
        mixer.music.play.assert_called_with(start=12.5)

    def test_seek_while_playing_restarts_stream(self, audio_file, mixer, tags):
        audio = PygameAudio(audio_file)
        audio.load()
        audio.play()

        audio.current_time = 40.0
        mixer.music.play.assert_called_with(start=40.0)

    def test_play_error_makes_unavailable(self, audio_file, mixer, tags):
        mixer.music.play.side_effect = pygame.error('device lost')
        audio = PygameAudio(audio_file)
        audio.load()

        assert audio.play() is False
        assert audio.available is False

    def test_poll_emits_ticks_and_end(self, audio_file, mixer, tags):
        ticks, ended = [], []
        audio = PygameAudio(audio_file)
        audio.on('timeupdate', ticks.append)
        audio.on('ended', lambda: ended.append(True))
        audio.load()
        audio.play()

        mixer.music.get_pos.return_value = 3000
        audio.poll()
        mixer.music.get_busy.return_value = False
        audio.poll()

        assert ticks == [3.0, 90.0]
        assert ended == [True]

    def test_play_after_end_restarts_from_beginning(self, audio_file, mixer, tags):
        ticks = []
        audio = PygameAudio(audio_file)
        audio.on('timeupdate', ticks.append)
        audio.load()
        audio.play()
        mixer.music.get_busy.return_value = False
        audio.poll()

        mixer.music.get_busy.return_value = True
        assert audio.play() is True
        mixer.music.play.assert_called_with(start=0.0)
        assert ticks == [90.0, 0.0]

    def test_poll_while_paused_is_silent(self, audio_file, mixer, tags):
        ticks = []
        audio = PygameAudio(audio_file)
        audio.on('timeupdate', ticks.append)
        audio.load()
        audio.poll()
        assert ticks == []
