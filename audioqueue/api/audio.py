"""
Audio Resources - Playable media objects commanded by playback controllers.

Every resource exposes the same small surface:
- commands: load(), play(), pause(), settable current_time, poll()
- notifications: 'loadedmetadata' (duration), 'timeupdate' (time), 'ended'
"""
import os
import time
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import mutagen

os.environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')
import pygame

from ..config import MIXER_FREQUENCY

logger = logging.getLogger(__name__)

EVENTS = ('loadedmetadata', 'timeupdate', 'ended')

# (path, mtime_ns, size) -> length in seconds
_durations: Dict[Tuple[str, int, int], float] = {}


class AudioResource:
    """Base class: event plumbing plus the command interface."""

    def __init__(self):
        self.available = False
        self._listeners: Dict[str, List[Callable]] = {event: [] for event in EVENTS}

    def on(self, event: str, callback: Callable):
        """Subscribe to a notification."""
        if event not in self._listeners:
            raise ValueError(f'Unknown audio event: {event}')
        self._listeners[event].append(callback)

    def off(self, event: str, callback: Callable):
        if callback in self._listeners.get(event, []):
            self._listeners[event].remove(callback)

    def emit(self, event: str, *args):
        for callback in list(self._listeners[event]):
            callback(*args)

    def load(self) -> bool:
        """Prepare the media. Returns True if it can be played."""
        return False

    def play(self) -> bool:
        return False

    def pause(self) -> bool:
        return False

    @property
    def current_time(self) -> float:
        return 0.0

    @current_time.setter
    def current_time(self, value: float):
        pass

    def poll(self):
        """Emit progress notifications. Call periodically."""


class NullAudio(AudioResource):
    """Stand-in for entries without an audio reference."""


class PygameAudio(AudioResource):
    """
    Plays a file through pygame.mixer.music.

    The mixer has one music stream, so a resource (re)loads its file on
    every play() and remembers its own offset while paused.
    """

    def __init__(self, path: Path):
        super().__init__()
        self.path = path
        self.duration = 0.0
        self._offset = 0.0      # Position at last play()/seek, seconds
        self._playing = False

    def load(self) -> bool:
        if not self.path.exists():
            logger.warning(f'Audio file not found: {self.path}')
            return False

        duration = read_duration(self.path)
        if duration is None:
            return False

        self.duration = duration
        self.available = True
        logger.debug(f'Loaded {self.path.name} ({self.duration:.1f}s)')
        self.emit('loadedmetadata', self.duration)
        return True

    def play(self) -> bool:
        if not self.available:
            return False
        if self.duration and self._offset >= self.duration:
            self._offset = 0.0
            self.emit('timeupdate', 0.0)
        try:
            _ensure_mixer()
            pygame.mixer.music.load(str(self.path))
            pygame.mixer.music.play(start=self._offset)
        except pygame.error as e:
            logger.error(f'Play failed for {self.path.name}: {e}')
            self.available = False
            return False
        self._playing = True
        logger.info(f'Playing {self.path.name} from {self._offset:.1f}s')
        return True

    def pause(self) -> bool:
        if not self._playing:
            return True
        self._offset = self.current_time
        self._playing = False
        try:
            pygame.mixer.music.stop()
        except pygame.error as e:
            logger.warning(f'Pause failed for {self.path.name}: {e}')
        logger.info(f'Paused {self.path.name} at {self._offset:.1f}s')
        return True

    @property
    def current_time(self) -> float:
        if not self._playing:
            return self._offset
        # get_pos() counts milliseconds since the last play() call
        elapsed = max(0, pygame.mixer.music.get_pos()) / 1000
        return min(self._offset + elapsed, self.duration or float('inf'))

    @current_time.setter
    def current_time(self, value: float):
        self._offset = max(0.0, value)
        if self._playing:
            try:
                pygame.mixer.music.play(start=self._offset)
            except pygame.error as e:
                logger.warning(f'Seek failed for {self.path.name}: {e}')

    def poll(self):
        if not self._playing:
            return
        if not pygame.mixer.music.get_busy():
            self._playing = False
            self._offset = self.duration
            self.emit('timeupdate', self.duration)
            self.emit('ended')
            return
        self.emit('timeupdate', self.current_time)


class SimulatedAudio(AudioResource):
    """Clock-driven resource for mock mode and machines without sound."""

    def __init__(self, duration: float, clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self.duration = duration
        self._clock = clock
        self._offset = 0.0
        self._started_at: Optional[float] = None

    def load(self) -> bool:
        self.available = True
        self.emit('loadedmetadata', self.duration)
        return True

    def play(self) -> bool:
        if not self.available:
            return False
        if self._offset >= self.duration:
            self._offset = 0.0
            self.emit('timeupdate', 0.0)
        self._started_at = self._clock()
        return True

    def pause(self) -> bool:
        self._offset = self.current_time
        self._started_at = None
        return True

    @property
    def current_time(self) -> float:
        if self._started_at is None:
            return self._offset
        return min(self.duration, self._offset + self._clock() - self._started_at)

    @current_time.setter
    def current_time(self, value: float):
        self._offset = max(0.0, min(value, self.duration))
        if self._started_at is not None:
            self._started_at = self._clock()

    def poll(self):
        if self._started_at is None:
            return
        position = self.current_time
        self.emit('timeupdate', position)
        if position >= self.duration:
            self._offset = self.duration
            self._started_at = None
            self.emit('ended')


def read_duration(path: Path) -> Optional[float]:
    """
    Length of an audio file in seconds, from its headers.

    Results are cached per file version so remounting a player does not
    reopen the file. Returns None if the format is not recognized.
    """
    stat = path.stat()
    key = (str(path), stat.st_mtime_ns, stat.st_size)
    if key in _durations:
        return _durations[key]

    try:
        media = mutagen.File(str(path))
    except mutagen.MutagenError as e:
        logger.warning(f'Cannot read audio {path.name}: {e}')
        return None
    if media is None or not getattr(media.info, 'length', None):
        logger.warning(f'Unrecognized audio format: {path.name}')
        return None

    _durations[key] = media.info.length
    return media.info.length


def _ensure_mixer():
    """Initialize the pygame mixer once. Raises pygame.error without a device."""
    if not pygame.mixer.get_init():
        pygame.mixer.init(frequency=MIXER_FREQUENCY)
        logger.info('Audio mixer initialized')


def shutdown_audio():
    """Release the mixer if it was started."""
    if pygame.mixer.get_init():
        pygame.mixer.quit()
        logger.info('Audio mixer closed')
