"""
Markdown Writer - Pair slide images with speaker notes in one Markdown document.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import IMAGES_DIRNAME, INCLUDE_PLACEHOLDERS
from .errors import MalformedPackage, NotesDocumentError
from .extractors import (
    NotesLookup,
    NotesReason,
    PptxPackage,
    flatten_text_body,
    parse_notes_document,
    resolve_notes_paths,
    select_notes_body,
)

logger = logging.getLogger(__name__)

MISSING_RELATIONSHIP_MESSAGE = "(Notes unavailable for this slide: slide relationship missing or invalid)"
NOTES_PART_MISSING_MESSAGE = "(Notes page for this slide could not be loaded)"
UNREADABLE_NOTES_MESSAGE = "(Notes page structure could not be parsed)"
NO_CONTENT_MESSAGE = "(Notes page has no content area)"


@dataclass
class SlideNotes:
    """Notes of one slide, ready to render.

    `placeholder` explains why `text` is empty when the notes could not be read.
    """
    slide_number: int
    text: str = ''
    placeholder: Optional[str] = None


def image_name_for(slide_number: int, image_names: Sequence[Optional[str]]) -> str:
    """Image file of a slide, or 'NNN.png' when no image was supplied for it."""
    if slide_number <= len(image_names) and image_names[slide_number - 1]:
        return image_names[slide_number - 1]
    return f"{slide_number:03d}.png"


def read_slide_notes(package: PptxPackage, lookup: NotesLookup) -> SlideNotes:
    """Extract the notes of one resolved slide, never raising for per-slide problems."""
    number = lookup.slide_number

    if lookup.reason == NotesReason.MISSING_RELATIONSHIP:
        return SlideNotes(number, placeholder=MISSING_RELATIONSHIP_MESSAGE)
    if lookup.reason == NotesReason.NOTES_PART_MISSING:
        return SlideNotes(number, placeholder=NOTES_PART_MISSING_MESSAGE)
    if not lookup.ok:
        return SlideNotes(number)

    try:
        notes = parse_notes_document(package.get_part(lookup.notes_partname))
    except MalformedPackage as e:
        logger.warning(f"Slide {number}: {e}")
        return SlideNotes(number, placeholder=UNREADABLE_NOTES_MESSAGE)
    except NotesDocumentError as e:
        logger.warning(f"Slide {number}: {e} ({lookup.notes_partname})")
        return SlideNotes(number, placeholder=UNREADABLE_NOTES_MESSAGE)

    tx_body = select_notes_body(notes)
    if tx_body is None:
        return SlideNotes(number, placeholder=NO_CONTENT_MESSAGE)
    return SlideNotes(number, text=flatten_text_body(tx_body).strip())


def assemble_markdown(
    slides: List[SlideNotes],
    image_names: Sequence[Optional[str]],
    images_dirname: str = IMAGES_DIRNAME,
    include_placeholders: bool = INCLUDE_PLACEHOLDERS
) -> str:
    """
    Render one block per slide: the image reference, then its notes.

    Args:
        slides: Notes of every slide, in slide order
        image_names: Image file names in slide order; short lists and None entries fall back to NNN.png
        images_dirname: Directory the image references point into
        include_placeholders: Render a short message for unreadable notes

    Returns:
        Markdown text with blocks separated by blank lines
    """
    blocks = []
    for slide in slides:
        lines = [f"![]({images_dirname}/{image_name_for(slide.slide_number, image_names)})"]
        if slide.text:
            lines.append(slide.text)
        elif include_placeholders and slide.placeholder:
            lines.append(slide.placeholder)
        blocks.append('\n\n'.join(lines))
    return '\n\n'.join(blocks).strip()


def extract_notes_markdown(
    pptx_path: Union[str, Path],
    image_names: Sequence[Optional[str]],
    images_dirname: str = IMAGES_DIRNAME,
    include_placeholders: bool = INCLUDE_PLACEHOLDERS
) -> str:
    """
    Build the Markdown document for a PPTX file.

    Raises:
        MalformedPackage: the file is not a readable presentation package
    """
    logger.info(f"Extracting notes from {pptx_path}")
    with PptxPackage.open(pptx_path) as package:
        lookups = resolve_notes_paths(package)
        slides = [read_slide_notes(package, lookup) for lookup in lookups]

    with_notes = sum(1 for slide in slides if slide.text)
    logger.info(f"Extracted notes for {with_notes} of {len(slides)} slides")
    return assemble_markdown(slides, image_names, images_dirname, include_placeholders)
