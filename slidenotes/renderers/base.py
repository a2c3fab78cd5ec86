"""
Slide renderer interface and helpers shared by all renderers.
"""

import re
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple

from ..config import IMAGE_EXTENSIONS

_NON_DIGITS = re.compile(r'\D')


class SlideRenderer(ABC):
    """Produces one image per slide of a presentation."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def render(self, input_path: Path, images_dir: Path) -> List[Optional[Path]]:
        """
        Write slide images into `images_dir`, replacing its previous content.

        Args:
            input_path: Presentation file to export
            images_dir: Directory receiving '001.png', '002.png', ...

        Returns:
            Image paths in slide order; None for a slide without an image

        Raises:
            RenderError: the external exporter failed
        """
        ...


def image_sort_key(name: str) -> Tuple[int, int, str]:
    """Order file names by the number they contain, names without digits last."""
    digits = _NON_DIGITS.sub('', name)
    if digits:
        return (0, int(digits), name)
    return (1, 0, name)


def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS


def list_slide_images(images_dir: Path) -> List[str]:
    """Image file names found in `images_dir`, in slide order."""
    images_dir = Path(images_dir)
    if not images_dir.is_dir():
        return []
    names = [path.name for path in images_dir.iterdir() if is_image_file(path)]
    return sorted(names, key=image_sort_key)


def clear_directory(directory: Path):
    """Create `directory` or empty it."""
    directory.mkdir(parents=True, exist_ok=True)
    for entry in directory.iterdir():
        if entry.is_dir():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def publish_images(sources: List[Path], images_dir: Path) -> List[Optional[Path]]:
    """Move already ordered images into `images_dir` as 001.<ext>, 002.<ext>, ..."""
    clear_directory(images_dir)
    published = []
    for number, source in enumerate(sources, start=1):
        destination = images_dir / f"{number:03d}{source.suffix.lower()}"
        shutil.move(str(source), str(destination))
        published.append(destination)
    return published
