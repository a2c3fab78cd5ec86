"""
LibreOffice Renderer - Export slides to PDF headlessly, then rasterize each page.
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

import pymupdf

from ..config import LIBREOFFICE_BINARY, RENDER_DPI, RENDER_TIMEOUT_SECONDS
from ..errors import RenderError
from .base import SlideRenderer, publish_images

logger = logging.getLogger(__name__)


class LibreOfficeRenderer(SlideRenderer):

    name = 'libreoffice'

    def __init__(
        self,
        binary: str = LIBREOFFICE_BINARY,
        dpi: int = RENDER_DPI,
        timeout: int = RENDER_TIMEOUT_SECONDS
    ):
        self.binary = binary
        self.dpi = dpi
        self.timeout = timeout

    def _convert_to_pdf(self, input_path: Path, out_dir: Path) -> Path:
        command = [self.binary, '--headless', '--convert-to', 'pdf', '--outdir', str(out_dir), str(input_path)]
        logger.info(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise RenderError(f"LibreOffice could not be run: {e}") from e

        if result.returncode != 0:
            raise RenderError(f"LibreOffice PDF conversion failed: {result.stderr.strip() or result.stdout.strip()}")

        pdf_path = out_dir / f"{input_path.stem}.pdf"
        if not pdf_path.exists():
            raise RenderError(f"Expected PDF not found at {pdf_path}")
        return pdf_path

    def _rasterize(self, pdf_path: Path, out_dir: Path) -> List[Path]:
        """Render every PDF page to PNG, one file per page."""
        pages = []
        try:
            doc = pymupdf.open(pdf_path)
            try:
                for page_num in range(len(doc)):
                    pixmap = doc[page_num].get_pixmap(dpi=self.dpi)
                    page_path = out_dir / f"page_{page_num + 1:04d}.png"
                    pixmap.save(str(page_path))
                    pages.append(page_path)
            finally:
                doc.close()
        except (pymupdf.FileDataError, RuntimeError) as e:
            raise RenderError(f"Cannot rasterize {pdf_path.name}: {e}") from e
        return pages

    def render(self, input_path: Path, images_dir: Path) -> List[Optional[Path]]:
        images_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(dir=images_dir.parent) as tmp:
            pdf_path = self._convert_to_pdf(input_path.resolve(), Path(tmp))
            pages = self._rasterize(pdf_path, Path(tmp))
            published = publish_images(pages, images_dir)

        logger.info(f"{len(published)} slides rendered from {pdf_path.name}")
        return published
