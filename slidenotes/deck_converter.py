"""
Deck Converter - Turn a Keynote or PowerPoint file into Markdown plus slide images.

Output layout::

    <output_dir>/<name>.md
    <output_dir>/images/001.png, 002.png, ...
"""

import logging
import sys
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from .config import IMAGES_DIRNAME, INCLUDE_PLACEHOLDERS, SLIDE_RENDERER, SUPPORTED_EXTENSIONS
from .errors import ConversionError, RenderError
from .logging_config import clear_current_deck, set_current_deck
from .markdown_writer import extract_notes_markdown
from .renderers import KeynoteRenderer, SlideRenderer, list_slide_images, select_renderer

logger = logging.getLogger(__name__)


class DeckConverter:
    """Runs image export and notes extraction for one deck at a time.

    Args:
        renderer: Slide image provider; chosen from configuration when None
        keynote: Keynote automation used for .key input (macOS only)
        platform: Platform name as in sys.platform
        include_placeholders: Render messages for slides whose notes are unreadable
    """

    def __init__(
        self,
        renderer: Optional[SlideRenderer] = None,
        keynote: Optional[KeynoteRenderer] = None,
        platform: Optional[str] = None,
        include_placeholders: bool = INCLUDE_PLACEHOLDERS
    ):
        self.renderer = renderer
        self.keynote = keynote
        self.platform = platform or sys.platform
        self.include_placeholders = include_placeholders

    def convert(self, input_path: Union[str, Path], output_dir: Union[str, Path, None] = None) -> Path:
        """
        Convert one deck.

        Args:
            input_path: .pptx or .key file
            output_dir: Destination directory (defaults to the input's directory)

        Returns:
            Path of the written Markdown file

        Raises:
            ConversionError: unsupported input or platform
            MalformedPackage: the PPTX structure is unreadable
        """
        input_path = Path(input_path).resolve()
        if not input_path.exists():
            raise ConversionError(f"Input file {input_path} not found")

        extension = input_path.suffix.lower()
        if extension not in SUPPORTED_EXTENSIONS:
            raise ConversionError("Input must be a Keynote (.key) or PowerPoint (.pptx) file")

        # Platform and renderer problems are reported before anything is written
        if extension == '.key':
            keynote = self._keynote()
        else:
            renderer = self.renderer or select_renderer(SLIDE_RENDERER, self.platform)

        output_dir = Path(output_dir).resolve() if output_dir else input_path.parent
        images_dir = output_dir / IMAGES_DIRNAME
        images_dir.mkdir(parents=True, exist_ok=True)

        set_current_deck(input_path.name)
        try:
            if extension == '.key':
                return self._convert_keynote(keynote, input_path, output_dir, images_dir)
            return self._convert_pptx(renderer, input_path, output_dir, images_dir)
        finally:
            clear_current_deck()

    def _keynote(self) -> KeynoteRenderer:
        if self.platform != 'darwin':
            raise ConversionError("Keynote (.key) files can only be processed on macOS")
        return self.keynote or KeynoteRenderer()

    def _convert_keynote(
        self,
        keynote: KeynoteRenderer,
        input_path: Path,
        output_dir: Path,
        images_dir: Path
    ) -> Path:
        # The intermediate PPTX is removed with the directory, also on failure
        with tempfile.TemporaryDirectory(dir=output_dir) as tmp:
            pptx_path = Path(tmp) / f"{input_path.stem}.pptx"
            logger.info("Converting Keynote to PPTX...")
            keynote.convert_to_pptx(input_path, pptx_path)
            logger.info(f"Keynote converted to PPTX: {pptx_path}")

            if self.renderer is None:
                image_names = self._render(keynote, input_path, images_dir)
            else:
                image_names = self._render(self.renderer, pptx_path, images_dir)

            return self._write_markdown(pptx_path, input_path.stem, output_dir, image_names)

    def _convert_pptx(
        self,
        renderer: SlideRenderer,
        input_path: Path,
        output_dir: Path,
        images_dir: Path
    ) -> Path:
        image_names = self._render(renderer, input_path, images_dir)
        return self._write_markdown(input_path, input_path.stem, output_dir, image_names)

    def _render(self, renderer: SlideRenderer, source: Path, images_dir: Path) -> List[Optional[str]]:
        """Export slide images; on failure keep going with whatever images exist."""
        logger.info(f"Exporting slide images with the {renderer.name} renderer...")
        try:
            images = renderer.render(source, images_dir)
        except RenderError as e:
            logger.error(f"Slide image export failed, continuing with notes only: {e}")
            return list_slide_images(images_dir)
        return [image.name if image is not None else None for image in images]

    def _write_markdown(
        self,
        pptx_path: Path,
        stem: str,
        output_dir: Path,
        image_names: List[Optional[str]]
    ) -> Path:
        markdown = extract_notes_markdown(
            pptx_path,
            image_names,
            images_dirname=IMAGES_DIRNAME,
            include_placeholders=self.include_placeholders,
        )
        markdown_path = output_dir / f"{stem}.md"
        markdown_path.write_text(markdown, encoding='utf-8')
        logger.info(f"Markdown written: {markdown_path}")
        return markdown_path
