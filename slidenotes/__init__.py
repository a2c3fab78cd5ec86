"""
slidenotes - Convert Keynote and PowerPoint decks into Markdown that pairs
each slide image with its speaker notes.
"""

from .deck_converter import DeckConverter
from .errors import ConversionError, MalformedPackage, NotesDocumentError, RenderError, SlideNotesError
from .markdown_writer import extract_notes_markdown

__version__ = "0.1.0"

__all__ = [
    'DeckConverter',
    'extract_notes_markdown',
    'SlideNotesError',
    'MalformedPackage',
    'NotesDocumentError',
    'RenderError',
    'ConversionError',
]
