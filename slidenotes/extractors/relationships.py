"""
Relationship Resolver - Map each slide of a PPTX package to its notes-slide part.

The chain followed for every slide is::

    /_rels/.rels                          -> presentation part
    p:presentation/p:sldIdLst/p:sldId     -> r:id (slide order)
    <presentation rels>[r:id]             -> slide part
    <slide dir>/_rels/<slide>.rels        -> notesSlide relationship
    target relative to <slide dir>        -> notes-slide part

Relationship ids are only unique within the relationship part that defines
them, so every table keeps the part it belongs to and resolves targets
against that part's directory.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from lxml import etree
from pptx.opc.constants import RELATIONSHIP_TARGET_MODE as RTM
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.opc.packuri import PACKAGE_URI, PackURI

from ..errors import MalformedPackage
from .package import PptxPackage
from .xml_tree import attr, child, children, is_element, parse_part

logger = logging.getLogger(__name__)

DEFAULT_PRESENTATION_PARTNAME = PackURI('/ppt/presentation.xml')


class NotesReason(Enum):
    """Why a slide has no resolvable notes-slide part."""
    MISSING_RELATIONSHIP = 'MissingRelationship'
    NO_NOTES_LINK = 'NoNotesLink'
    NOTES_PART_MISSING = 'NotesPartMissing'


@dataclass(frozen=True)
class Relationship:
    rId: str
    reltype: str
    target_ref: str
    is_external: bool = False


@dataclass
class RelationshipTable:
    """Relationships declared by one source part.

    Attributes:
        source_partname: Part the relationships belong to ('/' for the package)
        rels: Relationship id -> relationship, in document order
    """
    source_partname: PackURI
    rels: Dict[str, Relationship] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.rels)

    def get(self, rId: str) -> Optional[Relationship]:
        return self.rels.get(rId)

    def of_type(self, reltype: str) -> List[Relationship]:
        """Internal relationships of `reltype`, in document order."""
        return [
            rel for rel in self.rels.values()
            if rel.reltype == reltype and not rel.is_external
        ]

    def target_partname(self, rel: Relationship) -> PackURI:
        """Resolve a relationship target against the source part's directory."""
        return PackURI.from_rel_ref(self.source_partname.baseURI, rel.target_ref)


@dataclass
class NotesLookup:
    """Outcome of resolving one slide (slide numbers start at 1)."""
    slide_number: int
    slide_partname: Optional[PackURI] = None
    notes_partname: Optional[PackURI] = None
    reason: Optional[NotesReason] = None
    detail: str = ''

    @property
    def ok(self) -> bool:
        return self.notes_partname is not None


def parse_relationships(blob: bytes, source_partname: PackURI) -> RelationshipTable:
    """Build the relationship table of `source_partname` from its .rels part.

    Entries lacking an Id, Type or Target are skipped. When an id repeats,
    the first entry wins.

    Raises:
        etree.XMLSyntaxError: the .rels part is not well-formed XML
    """
    root = parse_part(blob)
    table = RelationshipTable(source_partname)

    entries = children(root, 'pr:Relationship') if is_element(root, 'pr:Relationships') else []
    for entry in entries:
        rId = attr(entry, 'Id')
        reltype = attr(entry, 'Type')
        target_ref = attr(entry, 'Target')
        if not (rId and reltype and target_ref):
            logger.debug(f"Skipping incomplete relationship in {source_partname.rels_uri}: {dict(entry.attrib)}")
            continue
        if rId in table.rels:
            logger.warning(
                f"Duplicate relationship id {rId} in {source_partname.rels_uri}, keeping the first"
            )
            continue
        table.rels[rId] = Relationship(
            rId=rId,
            reltype=reltype,
            target_ref=target_ref,
            is_external=attr(entry, 'TargetMode') == RTM.EXTERNAL,
        )

    return table


class RelationshipResolver:
    """Walks the relationship graph of one opened package.

    Package-level parts are read on construction; a missing or unreadable
    presentation part, slide list or presentation relationship part raises
    MalformedPackage. Everything per slide is recovered locally.
    """

    def __init__(self, package: PptxPackage):
        self.package = package
        self.presentation_partname = self._find_presentation_partname()
        self._slide_ids = self._read_slide_ids()
        self.presentation_rels = self._read_presentation_rels()

    @property
    def slide_count(self) -> int:
        return len(self._slide_ids)

    def _find_presentation_partname(self) -> PackURI:
        """Follow the package's officeDocument relationship, else the usual location."""
        blob = self.package.get_part(PACKAGE_URI.rels_uri)
        if blob is not None:
            try:
                package_rels = parse_relationships(blob, PACKAGE_URI)
            except etree.XMLSyntaxError as e:
                logger.warning(f"Cannot parse {PACKAGE_URI.rels_uri}: {e}")
            else:
                for rel in package_rels.of_type(RT.OFFICE_DOCUMENT):
                    partname = package_rels.target_partname(rel)
                    if self.package.has_part(partname):
                        return partname
        return DEFAULT_PRESENTATION_PARTNAME

    def _read_slide_ids(self) -> List[etree._Element]:
        partname = self.presentation_partname
        blob = self.package.get_part(partname)
        if blob is None:
            raise MalformedPackage(partname, "Presentation part not found in package")
        try:
            root = parse_part(blob)
        except etree.XMLSyntaxError as e:
            raise MalformedPackage(partname, f"Cannot parse presentation part: {e}") from e

        if not is_element(root, 'p:presentation'):
            raise MalformedPackage(partname, f"Unexpected root element {root.tag}")

        sld_id_lst = child(root, 'p:sldIdLst')
        if sld_id_lst is None:
            raise MalformedPackage(partname, "Slide list (p:sldIdLst) not found")
        return children(sld_id_lst, 'p:sldId')

    def _read_presentation_rels(self) -> RelationshipTable:
        rels_partname = self.presentation_partname.rels_uri
        blob = self.package.get_part(rels_partname)
        if blob is None:
            raise MalformedPackage(rels_partname, "Presentation relationships not found in package")
        try:
            table = parse_relationships(blob, self.presentation_partname)
        except etree.XMLSyntaxError as e:
            raise MalformedPackage(rels_partname, f"Cannot parse presentation relationships: {e}") from e

        if not table:
            logger.warning(f"No Relationship entries found in {rels_partname}")
        return table

    def slides(self) -> List[NotesLookup]:
        """One entry per slide with its slide part resolved (or a MissingRelationship reason)."""
        return [
            self._locate_slide(number, sld_id)
            for number, sld_id in enumerate(self._slide_ids, start=1)
        ]

    def _locate_slide(self, number: int, sld_id: etree._Element) -> NotesLookup:
        rId = (attr(sld_id, 'r:id') or '').strip()
        if not rId:
            detail = f"slide {number} has no r:id (attributes: {dict(sld_id.attrib)})"
            logger.warning(f"Slide {number}: missing or invalid r:id")
            return NotesLookup(number, reason=NotesReason.MISSING_RELATIONSHIP, detail=detail)

        rel = self.presentation_rels.get(rId)
        if rel is None or rel.reltype != RT.SLIDE or rel.is_external:
            detail = f"{rId} is not a slide relationship of {self.presentation_partname}"
            logger.warning(f"Slide {number}: no slide target found for {rId}")
            return NotesLookup(number, reason=NotesReason.MISSING_RELATIONSHIP, detail=detail)

        return NotesLookup(number, slide_partname=self.presentation_rels.target_partname(rel))

    def slide_relationships(self, slide_partname: PackURI) -> Optional[RelationshipTable]:
        """Relationship table of one slide, or None when the slide has none readable."""
        try:
            blob = self.package.get_part(slide_partname.rels_uri)
            if blob is None:
                return None
            return parse_relationships(blob, slide_partname)
        except (etree.XMLSyntaxError, MalformedPackage) as e:
            logger.warning(f"Cannot parse {slide_partname.rels_uri}, treating slide as having no notes: {e}")
            return None

    def _resolve_notes(self, lookup: NotesLookup) -> NotesLookup:
        number = lookup.slide_number
        slide_partname = lookup.slide_partname

        slide_rels = self.slide_relationships(slide_partname)
        if slide_rels is None:
            logger.info(f"Slide {number}: no relationships part {slide_partname.rels_uri}, assuming no notes")
            lookup.reason = NotesReason.NO_NOTES_LINK
            lookup.detail = f"{slide_partname.rels_uri} not found"
            return lookup

        notes_rels = slide_rels.of_type(RT.NOTES_SLIDE)
        if not notes_rels:
            lookup.reason = NotesReason.NO_NOTES_LINK
            lookup.detail = f"{slide_partname} has no notesSlide relationship"
            return lookup
        if len(notes_rels) > 1:
            logger.warning(
                f"Slide {number}: {len(notes_rels)} notesSlide relationships, using {notes_rels[0].rId}"
            )

        notes_partname = slide_rels.target_partname(notes_rels[0])
        if not self.package.has_part(notes_partname):
            logger.warning(f"Slide {number}: notes slide part not found: {notes_partname}")
            lookup.reason = NotesReason.NOTES_PART_MISSING
            lookup.detail = f"{notes_partname} not found"
            return lookup

        lookup.notes_partname = notes_partname
        return lookup

    def resolve_notes_paths(self) -> List[NotesLookup]:
        """Exactly one lookup per slide, in slide order."""
        results = []
        for lookup in self.slides():
            if lookup.reason is None:
                lookup = self._resolve_notes(lookup)
            results.append(lookup)
        return results


def resolve_notes_paths(package: PptxPackage) -> List[NotesLookup]:
    """Resolve the notes-slide part of every slide of `package`.

    Raises:
        MalformedPackage: package-level parts are missing or unreadable
    """
    return RelationshipResolver(package).resolve_notes_paths()
