"""
PPTX Package - Read-only access to the parts of a ZIP-packaged presentation.
"""

import zipfile
import zlib
from pathlib import Path
from typing import Optional, Union

from ..errors import MalformedPackage


class PptxPackage:
    """Named-part lookup over an opened PPTX archive.

    Part names are accepted with or without the leading '/' used by
    package URIs ('/ppt/presentation.xml' and 'ppt/presentation.xml' are the
    same part). The archive is never written.
    """

    def __init__(self, zip_file: zipfile.ZipFile, path: Optional[Path] = None):
        self._zip = zip_file
        self.path = path
        self._members = {info.filename: info for info in zip_file.infolist()}

    @classmethod
    def open(cls, pptx_path: Union[str, Path]) -> "PptxPackage":
        """Open a package from disk.

        Raises:
            MalformedPackage: the file is not a readable ZIP archive
        """
        pptx_path = Path(pptx_path)
        try:
            zip_file = zipfile.ZipFile(pptx_path)
        except (zipfile.BadZipFile, OSError) as e:
            raise MalformedPackage(
                None,
                f"Cannot read {pptx_path}: it may be damaged or not a PPTX file ({e})"
            ) from e
        return cls(zip_file, pptx_path)

    @staticmethod
    def _membername(partname: str) -> str:
        return partname.lstrip('/')

    def has_part(self, partname: str) -> bool:
        return self._membername(partname) in self._members

    def get_part(self, partname: str) -> Optional[bytes]:
        """Return the bytes of a part, or None when the package lacks it.

        Raises:
            MalformedPackage: the archive member is corrupt
        """
        info = self._members.get(self._membername(partname))
        if info is None:
            return None
        try:
            return self._zip.read(info)
        except (zipfile.BadZipFile, zlib.error, OSError) as e:
            raise MalformedPackage(partname, f"Cannot read part from {self.path}: {e}") from e

    def close(self):
        self._zip.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
