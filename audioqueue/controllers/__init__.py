"""
AudioQueue Controllers - Playback state machines.
"""
from .playback import PlaybackController, PlayerRegistry

__all__ = ['PlaybackController', 'PlayerRegistry']
