"""
Playback Controller - Per-entry transport state machine.

States:
- Paused (initial): is_playing False
- Playing: is_playing True

Only toggle() moves between them on user request. Metadata, time ticks and
seeks update the position fields in either state.
"""
import logging
from typing import Callable, Dict, Iterable, Optional

from ..models import Entry, PlaybackState
from ..api.audio import AudioResource

logger = logging.getLogger(__name__)


class PlaybackController:
    """Drives one audio resource and mirrors its state."""

    def __init__(self, audio: Optional[AudioResource] = None):
        self.audio = audio
        self.state = PlaybackState()

        if audio is not None:
            audio.on('loadedmetadata', self.on_metadata_loaded)
            audio.on('timeupdate', self.on_time_tick)
            audio.on('ended', self.on_ended)

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    @property
    def can_play(self) -> bool:
        return self.audio is not None and self.audio.available

    def toggle(self) -> bool:
        """
        Play if paused, pause if playing.

        Returns False (and changes nothing) when there is no usable audio.
        """
        if not self.can_play:
            logger.debug('Toggle ignored: no playable audio')
            return False

        if self.state.is_playing:
            ok = self.audio.pause()
        else:
            ok = self.audio.play()

        if not ok:
            logger.debug('Toggle ignored: audio command failed')
            return False

        self.state.is_playing = not self.state.is_playing
        return True

    def on_metadata_loaded(self, duration: float):
        self.state.total_duration = max(0.0, float(duration))
        if self.state.duration_known:
            self.state.current_time = min(self.state.current_time, self.state.total_duration)

    def on_time_tick(self, time: float):
        position = max(0.0, float(time))
        if self.state.duration_known:
            position = min(position, self.state.total_duration)
        self.state.current_time = position

    def on_ended(self):
        self.state.is_playing = False
        self.state.current_time = self.state.total_duration

    def seek(self, time: float) -> float:
        """Jump to time, clamped into [0, total_duration]. Returns the new position."""
        position = max(0.0, min(float(time), self.state.total_duration))
        self.state.current_time = position
        if self.audio is not None:
            self.audio.current_time = position
        return position

    def detach(self):
        """Stop listening to the resource (player unmounted)."""
        if self.audio is None:
            return
        if self.state.is_playing:
            self.audio.pause()
            self.state.is_playing = False
        self.audio.off('loadedmetadata', self.on_metadata_loaded)
        self.audio.off('timeupdate', self.on_time_tick)
        self.audio.off('ended', self.on_ended)


class PlayerRegistry:
    """
    Mounted players keyed by entry id.

    A player is mounted when its entry becomes visible and discarded when
    it is hidden, taking its PlaybackState with it. In exclusive mode
    starting one player pauses whichever other player is running.
    """

    def __init__(self, audio_factory: Callable[[Entry], AudioResource], exclusive: bool = True):
        self._audio_factory = audio_factory
        self.exclusive = exclusive
        self._players: Dict[str, PlaybackController] = {}

    def __contains__(self, entry_id: str) -> bool:
        return entry_id in self._players

    def __len__(self) -> int:
        return len(self._players)

    def get(self, entry_id: str) -> Optional[PlaybackController]:
        return self._players.get(entry_id)

    def mount(self, entry: Entry) -> PlaybackController:
        """Create (or return the existing) player for entry."""
        player = self._players.get(entry.id)
        if player is not None:
            return player

        audio = self._audio_factory(entry)
        player = PlaybackController(audio)
        self._players[entry.id] = player
        if not audio.load():
            logger.debug(f'No playable audio for {entry.title!r}')
        return player

    def unmount(self, entry_id: str):
        player = self._players.pop(entry_id, None)
        if player is not None:
            player.detach()

    def sync(self, visible: Iterable[Entry]):
        """Mount players for visible entries and unmount the rest."""
        visible = list(visible)
        visible_ids = {entry.id for entry in visible}
        for entry_id in list(self._players):
            if entry_id not in visible_ids:
                self.unmount(entry_id)
        for entry in visible:
            self.mount(entry)

    @property
    def active_id(self) -> Optional[str]:
        for entry_id, player in self._players.items():
            if player.is_playing:
                return entry_id
        return None

    def toggle(self, entry_id: str) -> bool:
        player = self._players.get(entry_id)
        if player is None:
            return False

        if self.exclusive and not player.is_playing and player.can_play:
            for other_id, other in self._players.items():
                if other_id != entry_id and other.is_playing:
                    logger.info(f'Pausing {other_id} to play {entry_id}')
                    other.toggle()

        return player.toggle()

    def seek(self, entry_id: str, time: float) -> Optional[float]:
        player = self._players.get(entry_id)
        if player is None:
            return None
        return player.seek(time)

    def poll(self):
        """Let every mounted resource report its position."""
        for player in list(self._players.values()):
            if player.audio is not None:
                player.audio.poll()

    def clear(self):
        for entry_id in list(self._players):
            self.unmount(entry_id)
