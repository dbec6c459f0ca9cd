"""
AudioQueue Utilities - Shared helper functions.
"""
from pathlib import Path
from typing import Optional

from .config import AUDIO_DIR


def format_time(seconds: float) -> str:
    """Format seconds as m:ss, or h:mm:ss past the hour."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f'{hours}:{minutes:02d}:{secs:02d}'
    return f'{minutes}:{secs:02d}'


def parse_time(text: str) -> float:
    """Parse '90', '1:30' or '1:02:03' into seconds.

    Raises ValueError for anything else.
    """
    parts = text.strip().split(':')
    if not parts or len(parts) > 3 or any(p == '' for p in parts):
        raise ValueError(f'Invalid time: {text!r}')
    seconds = 0.0
    for part in parts:
        value = float(part)
        if value < 0:
            raise ValueError(f'Invalid time: {text!r}')
        seconds = seconds * 60 + value
    return seconds


def resolve_audio_path(audio: Optional[str], root: Path = AUDIO_DIR) -> Optional[Path]:
    """Map an entry's audio reference to a file under the audio root."""
    if not audio:
        return None
    # Tolerate the web-style '/audio/name.mp3' form
    name = audio.strip()
    if name.startswith('/audio/'):
        name = name[len('/audio/'):]
    return root / name.lstrip('/')
