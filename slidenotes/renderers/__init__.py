"""
Slide Renderers - Produce the image shown above each slide's notes.
"""

import shutil
import sys
from typing import Optional

from ..config import LIBREOFFICE_BINARY, RENDERER_CHOICES, SLIDE_RENDERER
from ..errors import ConversionError
from .base import SlideRenderer, image_sort_key, list_slide_images
from .embedded_media import EmbeddedMediaRenderer
from .keynote import KeynoteRenderer
from .libreoffice import LibreOfficeRenderer


def select_renderer(name: str = SLIDE_RENDERER, platform: Optional[str] = None) -> SlideRenderer:
    """Build the renderer called `name`; 'auto' picks the best one available here."""
    platform = platform or sys.platform

    if name == 'auto':
        if platform == 'darwin':
            return KeynoteRenderer()
        if shutil.which(LIBREOFFICE_BINARY):
            return LibreOfficeRenderer()
        return EmbeddedMediaRenderer()
    if name == 'keynote':
        if platform != 'darwin':
            raise ConversionError("The Keynote renderer is only available on macOS")
        return KeynoteRenderer()
    if name == 'libreoffice':
        return LibreOfficeRenderer()
    if name == 'media':
        return EmbeddedMediaRenderer()

    raise ConversionError(f"Unknown renderer '{name}' (choose from {', '.join(RENDERER_CHOICES)})")


__all__ = [
    'SlideRenderer',
    'KeynoteRenderer',
    'LibreOfficeRenderer',
    'EmbeddedMediaRenderer',
    'select_renderer',
    'list_slide_images',
    'image_sort_key',
]
