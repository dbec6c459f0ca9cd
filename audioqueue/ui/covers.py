"""
Cover Cache - Loads, downloads and caches entry cover thumbnails.
"""
import time
import logging
from io import BytesIO
from pathlib import Path
from typing import Dict, Optional, Tuple

import requests
from PIL import Image, ImageDraw, UnidentifiedImageError

from ..models import Entry
from ..config import (
    COLORS, COVER_WIDTH, COVER_HEIGHT, COVER_RADIUS,
    COVER_CACHE_MAX_SIZE, COVER_DOWNLOAD_TIMEOUT,
)

logger = logging.getLogger(__name__)


def apply_rounded_corners(img: Image.Image, radius: int) -> Image.Image:
    """Apply rounded corners to a PIL image with transparency."""
    width, height = img.size
    mask = Image.new('L', (width, height), 0)
    draw = ImageDraw.Draw(mask)
    draw.rounded_rectangle([(0, 0), (width - 1, height - 1)], radius=radius, fill=255)
    result = Image.new('RGBA', (width, height), (0, 0, 0, 0))
    result.paste(img, (0, 0), mask)
    return result


def vertical_gradient(size: Tuple[int, int], top: tuple, bottom: tuple) -> Image.Image:
    width, height = size
    img = Image.new('RGBA', size)
    draw = ImageDraw.Draw(img)
    for y in range(height):
        t = y / max(1, height - 1)
        color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
        draw.line([(0, y), (width - 1, y)], fill=color + (255,))
    return img


class CoverCache:
    """Cover thumbnails keyed by cover reference, with LRU eviction."""

    def __init__(self, covers_dir: Path, size: Tuple[int, int] = (COVER_WIDTH, COVER_HEIGHT)):
        self.covers_dir = covers_dir
        self.size = size
        self.cache: Dict[str, Image.Image] = {}
        self._access_times: Dict[str, float] = {}
        self.session = requests.Session()

    def get_placeholder(self) -> Image.Image:
        """Gradient tile shown when an entry has no usable cover."""
        cache_key = '_placeholder'
        if cache_key not in self.cache:
            tile = vertical_gradient(self.size, COLORS['placeholder_top'], COLORS['placeholder_bottom'])
            self.cache[cache_key] = apply_rounded_corners(tile, COVER_RADIUS)
        return self.cache[cache_key]

    def get(self, cover_url: Optional[str]) -> Image.Image:
        """Get the thumbnail for a cover reference, or the placeholder."""
        if not cover_url:
            return self.get_placeholder()

        if cover_url in self.cache:
            self._access_times[cover_url] = time.time()
            return self.cache[cover_url]

        self._evict_if_needed()

        if cover_url.startswith(('http://', 'https://')):
            img = self._download(cover_url)
        else:
            img = self._load_local(self._local_path(cover_url))

        if img is None:
            return self.get_placeholder()

        thumb = self._make_thumbnail(img)
        self.cache[cover_url] = thumb
        self._access_times[cover_url] = time.time()
        return thumb

    def export(self, entry: Entry, dest: Path) -> Path:
        """Write the entry's card thumbnail as PNG."""
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        self.get(entry.cover_url).save(dest, 'PNG')
        logger.info(f'Saved cover for {entry.title!r} to {dest}')
        return dest

    def _local_path(self, cover_url: str) -> Path:
        path = Path(cover_url)
        if path.is_absolute() and path.exists():
            return path
        return self.covers_dir / cover_url.replace('/covers/', '').lstrip('/')

    def _make_thumbnail(self, img: Image.Image) -> Image.Image:
        img = img.convert('RGBA')
        img = img.resize(self.size, Image.Resampling.LANCZOS)
        return apply_rounded_corners(img, COVER_RADIUS)

    def _load_local(self, path: Path) -> Optional[Image.Image]:
        if not path.exists():
            logger.debug(f'Cover not found: {path}')
            return None
        try:
            with Image.open(path) as img:
                img.load()
                return img.copy()
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f'Cannot read cover {path.name}: {e}')
            return None

    def _download(self, url: str) -> Optional[Image.Image]:
        try:
            resp = self.session.get(url, timeout=COVER_DOWNLOAD_TIMEOUT)
            resp.raise_for_status()
            return Image.open(BytesIO(resp.content))
        except requests.RequestException as e:
            logger.warning(f'Error downloading cover {url}: {e}')
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f'Downloaded cover is not an image {url}: {e}')
        return None

    def _evict_if_needed(self):
        """Evict least recently used covers if the cache is too large."""
        if len(self.cache) <= COVER_CACHE_MAX_SIZE:
            return
        evictable = [
            (key, self._access_times.get(key, 0))
            for key in self.cache
            if not key.startswith('_')  # Keep placeholder
        ]
        evictable.sort(key=lambda x: x[1])
        keys_to_remove = [key for key, _ in evictable[:10]]
        for key in keys_to_remove:
            del self.cache[key]
            self._access_times.pop(key, None)
        logger.debug(f'Evicted {len(keys_to_remove)} LRU cached covers')
