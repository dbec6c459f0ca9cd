"""
AudioQueue API modules - Catalog state and media integrations.
"""
from .catalog import CatalogStore
from .audio import AudioResource, NullAudio, PygameAudio, SimulatedAudio, shutdown_audio

__all__ = [
    'CatalogStore',
    'AudioResource', 'NullAudio', 'PygameAudio', 'SimulatedAudio',
    'shutdown_audio',
]
