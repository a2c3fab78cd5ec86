"""
Keynote Renderer - Export slides through Keynote automation (macOS only).

Keynote opens both .key and .pptx files, so it serves as the full-slide
renderer for either input, and converts Keynote decks to PPTX for notes
extraction.
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from ..config import RENDER_TIMEOUT_SECONDS
from ..errors import RenderError
from .base import SlideRenderer, image_sort_key, is_image_file, publish_images

logger = logging.getLogger(__name__)

OSASCRIPT = 'osascript'
SUCCESS_MARKER = 'OK:'

EXPORT_IMAGES_SCRIPT = '''on run argv
	set inputFile to POSIX file (item 1 of argv) as alias
	set outputFolder to item 2 of argv
	do shell script "mkdir -p " & quoted form of outputFolder
	tell application "Keynote"
		set theDocument to open inputFile
		export theDocument to POSIX file outputFolder as slide images with properties {image format:PNG, skipped slides:false}
		close theDocument saving no
	end tell
	return "OK: slides exported to " & outputFolder
end run
'''

CONVERT_TO_PPTX_SCRIPT = '''on run argv
	set inputFile to POSIX file (item 1 of argv) as alias
	set outputFile to item 2 of argv
	tell application "Keynote"
		set theDocument to open inputFile
		export theDocument to POSIX file outputFile as Microsoft PowerPoint
		close theDocument saving no
	end tell
	return "OK: converted to " & outputFile
end run
'''


class KeynoteRenderer(SlideRenderer):
    """Drives Keynote through AppleScript."""

    name = 'keynote'

    def __init__(self, timeout: int = RENDER_TIMEOUT_SECONDS):
        self.timeout = timeout

    def _run_script(self, script: str, work_dir: Path, *args) -> str:
        """Run an AppleScript with `args` as argv and return its stdout.

        The script file lives in `work_dir` only for the duration of the call.
        """
        script_path = work_dir / 'slidenotes.applescript'
        script_path.write_text(script, encoding='utf-8')
        command = [OSASCRIPT, str(script_path), *[str(arg) for arg in args]]
        logger.info(f"Running AppleScript: {' '.join(command)}")
        try:
            result = subprocess.run(command, capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            raise RenderError(f"AppleScript could not be run: {e}") from e
        finally:
            script_path.unlink(missing_ok=True)

        stdout = result.stdout.strip()
        stderr = result.stderr.strip()
        if result.returncode != 0 or not stdout.startswith(SUCCESS_MARKER):
            raise RenderError(f"AppleScript failed: {stderr or stdout or f'exit code {result.returncode}'}")
        if stderr:
            logger.info(f"AppleScript stderr (warnings): {stderr}")
        logger.info(stdout)
        return stdout

    def render(self, input_path: Path, images_dir: Path) -> List[Optional[Path]]:
        images_dir.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryDirectory(dir=images_dir.parent) as tmp:
            export_dir = Path(tmp) / 'exported'
            self._run_script(EXPORT_IMAGES_SCRIPT, Path(tmp), input_path.resolve(), export_dir)

            exported = []
            if export_dir.is_dir():
                exported = [path for path in export_dir.iterdir() if is_image_file(path)]
            if not exported:
                logger.warning(f"Keynote exported no images to {export_dir}")
            exported.sort(key=lambda path: image_sort_key(path.name))

            published = publish_images(exported, images_dir)

        logger.info(f"Saved {len(published)} slide images to {images_dir}")
        return published

    def convert_to_pptx(self, keynote_path: Path, pptx_path: Path) -> Path:
        """Export a Keynote deck as PowerPoint so its notes can be read."""
        with tempfile.TemporaryDirectory(dir=pptx_path.parent) as tmp:
            self._run_script(CONVERT_TO_PPTX_SCRIPT, Path(tmp), keynote_path.resolve(), pptx_path.resolve())
        if not pptx_path.exists():
            raise RenderError(f"Keynote reported success but {pptx_path} was not created")
        return pptx_path
