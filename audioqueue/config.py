"""
AudioQueue Configuration - All constants and settings.
"""
import os
import sys
from pathlib import Path

APP_NAME = 'AudioQueue'
APP_TAGLINE = 'Your listening library'

# ============================================
# PATHS
# ============================================

# Per-user data; audio files are referenced relative to AUDIO_DIR (e.g. 'alchemist.mp3')
DATA_DIR = Path.home() / '.audioqueue'
AUDIO_DIR = Path(os.environ.get('AUDIOQUEUE_AUDIO_DIR', DATA_DIR / 'audio'))
COVERS_DIR = Path(os.environ.get('AUDIOQUEUE_COVERS_DIR', DATA_DIR / 'covers'))

# Logging directory
LOG_DIR = DATA_DIR / 'logs'
LOG_FILE = LOG_DIR / 'audioqueue.log'
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5MB per file
LOG_BACKUP_COUNT = 5

# ============================================
# COMMAND LINE FLAGS
# ============================================

MOCK_MODE = '--mock' in sys.argv
EMPTY_LIBRARY = '--empty' in sys.argv

# ============================================
# LIBRARY
# ============================================

CATEGORIES = [
    'Fiction',
    'Non-Fiction',
    'Business',
    'Self-Help',
    'Technology',
    'History',
    'Science',
    'Podcast',
]

STATUS_TO_LISTEN = 'to-listen'
STATUS_LISTENING = 'listening'
STATUS_COMPLETED = 'completed'
STATUSES = (STATUS_TO_LISTEN, STATUS_LISTENING, STATUS_COMPLETED)

STATUS_LABELS = {
    STATUS_TO_LISTEN: 'To Listen',
    STATUS_LISTENING: 'Currently Listening',
    STATUS_COMPLETED: 'Completed',
}

# ============================================
# COVERS (card thumbnail, 3:4 portrait)
# ============================================

COVER_WIDTH = 48
COVER_HEIGHT = 64
COVER_RADIUS = 6
COVER_CACHE_MAX_SIZE = 100
COVER_DOWNLOAD_TIMEOUT = 10

COLORS = {
    'placeholder_top': (192, 132, 252),     # purple-400
    'placeholder_bottom': (147, 51, 234),   # purple-600
}

# ============================================
# PLAYBACK
# ============================================

SCRUBBER_WIDTH = 20   # Characters in the text scrubber
MIXER_FREQUENCY = 44100
MOCK_AUDIO_DURATION = 5 * 60  # Seconds, simulated audio in --mock mode
