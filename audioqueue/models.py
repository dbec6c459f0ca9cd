"""
AudioQueue Data Models - Core data structures.
"""
from dataclasses import dataclass
from typing import Optional, Literal

Status = Literal['to-listen', 'listening', 'completed']


@dataclass(frozen=True)
class Entry:
    """One audiobook or podcast in the catalog."""
    id: str
    title: str
    author: str
    duration: str = ''  # Display text, e.g. '8h 30m'
    category: str = ''
    status: Status = 'to-listen'
    description: str = ''
    cover_url: Optional[str] = None
    audio: Optional[str] = None  # Relative to AUDIO_DIR


@dataclass
class PlaybackState:
    """Transport state of one mounted player."""
    is_playing: bool = False
    current_time: float = 0.0
    total_duration: float = 0.0  # 0 until the resource reports metadata

    @property
    def duration_known(self) -> bool:
        return self.total_duration > 0

    @property
    def progress(self) -> float:
        """Get playback progress as 0.0-1.0."""
        if self.total_duration <= 0:
            return 0.0
        return min(1.0, self.current_time / self.total_duration)


@dataclass
class LibraryStats:
    """Entry counts per status."""
    total: int = 0
    to_listen: int = 0
    listening: int = 0
    completed: int = 0
