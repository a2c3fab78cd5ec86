"""
Embedded Media Renderer - Copy the first picture of each slide out of the PPTX package.

Used where no slide exporter is available. The pictures are whatever the
author placed on the slide, not renders of the whole slide.
"""

import logging
import posixpath
from pathlib import Path
from typing import List, Optional

from pptx.opc.constants import RELATIONSHIP_TYPE as RT

from ..config import IMAGE_EXTENSIONS
from ..errors import MalformedPackage
from ..extractors import NotesLookup, PptxPackage, RelationshipResolver
from .base import SlideRenderer, clear_directory

logger = logging.getLogger(__name__)


class EmbeddedMediaRenderer(SlideRenderer):

    name = 'media'

    def render(self, input_path: Path, images_dir: Path) -> List[Optional[Path]]:
        logger.warning(
            "Extracting pictures embedded in the slides; they may not show the full slide. "
            "Run on macOS with Keynote or install LibreOffice for full-slide images."
        )
        clear_directory(images_dir)

        with PptxPackage.open(input_path) as package:
            resolver = RelationshipResolver(package)
            images = [
                self._extract_slide_picture(package, resolver, slide, images_dir)
                for slide in resolver.slides()
            ]

        found = sum(1 for image in images if image is not None)
        if found:
            logger.info(f"Extracted {found} embedded pictures to {images_dir}")
        else:
            logger.info("No embedded slide pictures found in the PPTX")
        return images

    def _extract_slide_picture(
        self,
        package: PptxPackage,
        resolver: RelationshipResolver,
        slide: NotesLookup,
        images_dir: Path
    ) -> Optional[Path]:
        if slide.slide_partname is None:
            return None
        slide_rels = resolver.slide_relationships(slide.slide_partname)
        if slide_rels is None:
            return None

        for rel in slide_rels.of_type(RT.IMAGE):
            partname = slide_rels.target_partname(rel)
            ext = posixpath.splitext(partname)[1].lower()
            if ext not in IMAGE_EXTENSIONS:
                logger.debug(f"Slide {slide.slide_number}: skipping {partname}, not a supported image type")
                continue
            try:
                blob = package.get_part(partname)
            except MalformedPackage as e:
                logger.warning(f"Slide {slide.slide_number}: {e}")
                continue
            if blob is None:
                logger.warning(f"Slide {slide.slide_number}: image part not found: {partname}")
                continue
            destination = images_dir / f"{slide.slide_number:03d}{ext}"
            destination.write_bytes(blob)
            return destination

        return None
