"""
PPTX Extractors - Resolve and extract speaker notes from PowerPoint packages.
"""

from .package import PptxPackage
from .relationships import (
    NotesLookup,
    NotesReason,
    RelationshipResolver,
    RelationshipTable,
    resolve_notes_paths,
)
from .notes_extractor import (
    extract_notes_text,
    flatten_text_body,
    parse_notes_document,
    select_notes_body,
)

__all__ = [
    'PptxPackage',
    'NotesLookup',
    'NotesReason',
    'RelationshipResolver',
    'RelationshipTable',
    'resolve_notes_paths',
    'extract_notes_text',
    'flatten_text_body',
    'parse_notes_document',
    'select_notes_body',
]
