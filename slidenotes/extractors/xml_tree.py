"""
XML Tree - Parsing and absence-tolerant lookups over OOXML parts.

Every accessor accepts None and answers None (or an empty list) instead of
raising, so extraction code can walk optional structure like
``p:cSld/p:spTree/p:sp`` without checking each level.
"""

from typing import List, Optional

from lxml import etree
from pptx.opc.constants import NAMESPACE
from pptx.oxml.ns import qn

# Entities are never expanded; blank text is kept since a whitespace-only run is real text
_parser = etree.XMLParser(resolve_entities=False, no_network=True)


def parse_part(blob: bytes) -> etree._Element:
    """Parse the bytes of an XML part.

    Raises:
        etree.XMLSyntaxError: the part is not well-formed XML
    """
    return etree.fromstring(blob, _parser)


def qname(step: str) -> str:
    """Clark notation for a prefixed name such as 'p:sldId' or 'pr:Relationship'."""
    prefix, local = step.split(':', 1)
    if prefix == 'pr':
        return f"{{{NAMESPACE.OPC_RELATIONSHIPS}}}{local}"
    return qn(step)


def is_element(element: Optional[etree._Element], step: str) -> bool:
    return element is not None and element.tag == qname(step)


def child(element: Optional[etree._Element], *path: str) -> Optional[etree._Element]:
    """Follow a chain of first-matching children, e.g. child(sp, 'p:nvSpPr', 'p:nvPr', 'p:ph')."""
    node = element
    for step in path:
        if node is None:
            return None
        node = node.find(qname(step))
    return node


def children(element: Optional[etree._Element], step: str) -> List[etree._Element]:
    """All direct children named `step`, in document order."""
    if element is None:
        return []
    return element.findall(qname(step))


def attr(element: Optional[etree._Element], name: str) -> Optional[str]:
    """Attribute value, or None when the element or attribute is absent.

    Prefixed names ('r:id') are namespaced; plain names ('Id') are not.
    """
    if element is None:
        return None
    key = qname(name) if ':' in name else name
    return element.get(key)


def text_of(element: Optional[etree._Element]) -> str:
    """Character content of a leaf element such as a:t ('' when absent)."""
    if element is None:
        return ''
    return element.text or ''
