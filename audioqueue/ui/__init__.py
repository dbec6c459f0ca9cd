"""
AudioQueue UI - Rendering and visual components.
"""
from .covers import CoverCache
from .renderer import TextRenderer
from .context import RenderContext

__all__ = ['CoverCache', 'TextRenderer', 'RenderContext']
