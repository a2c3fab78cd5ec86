"""
Notes Extractor - Extract speaker-notes text from a notes-slide part.
"""

import logging
from typing import List, Optional

from lxml import etree

from ..errors import NotesDocumentError
from .xml_tree import attr, child, children, is_element, parse_part, text_of

logger = logging.getLogger(__name__)

# Placeholder index PowerPoint gives the notes body on a notes page
NOTES_BODY_IDX = '1'


def parse_notes_document(blob: bytes) -> etree._Element:
    """Parse a notes-slide part, checking it is a p:notes document."""
    try:
        root = parse_part(blob)
    except etree.XMLSyntaxError as e:
        raise NotesDocumentError(f"Cannot parse notes slide: {e}") from e
    if not is_element(root, 'p:notes'):
        raise NotesDocumentError(f"Unexpected notes slide root element {root.tag}")
    return root


def _shapes(notes: etree._Element) -> List[etree._Element]:
    return children(child(notes, 'p:cSld', 'p:spTree'), 'p:sp')


def select_notes_body(notes: etree._Element) -> Optional[etree._Element]:
    """Pick the p:txBody holding the speaker notes, or None.

    Precedence: the 'body' placeholder, then the only shape on placeholder
    index 1, then the only shape with a text body, then the first shape with
    a text body.
    """
    shapes = _shapes(notes)

    for shape in shapes:
        ph = child(shape, 'p:nvSpPr', 'p:nvPr', 'p:ph')
        if attr(ph, 'type') != 'body':
            continue
        tx_body = child(shape, 'p:txBody')
        if tx_body is not None:
            return tx_body
        logger.warning("Notes shape marked as body has no text body")

    indexed = [
        shape for shape in shapes
        if attr(child(shape, 'p:nvSpPr', 'p:nvPr', 'p:ph'), 'idx') == NOTES_BODY_IDX
        and child(shape, 'p:txBody') is not None
    ]
    if len(indexed) == 1:
        return child(indexed[0], 'p:txBody')

    text_bodies = [
        tx_body for tx_body in (child(shape, 'p:txBody') for shape in shapes)
        if tx_body is not None
    ]
    if len(text_bodies) > 1:
        logger.warning(
            f"Ambiguous notes body: {len(text_bodies)} shapes carry text and none is marked, using the first"
        )
    return text_bodies[0] if text_bodies else None


def flatten_text_body(tx_body: Optional[etree._Element]) -> str:
    """Flatten paragraphs, runs and line breaks into plain text.

    Paragraphs are separated by one blank line. A line break ends the text
    gathered so far and adds one empty paragraph of its own.
    """
    paragraph_texts = []

    for paragraph in children(tx_body, 'a:p'):
        current = ''
        for node in paragraph:
            if is_element(node, 'a:r'):
                current += text_of(child(node, 'a:t'))
            elif is_element(node, 'a:br'):
                if current.strip():
                    paragraph_texts.append(current.strip())
                    current = ''
                paragraph_texts.append('')
        if current.strip():
            paragraph_texts.append(current.strip())

    return '\n\n'.join(paragraph_texts)


def extract_notes_text(notes: etree._Element) -> str:
    """Speaker-notes text of a parsed notes document ('' when it has none)."""
    return flatten_text_body(select_notes_body(notes))
