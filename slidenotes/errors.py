"""
Exceptions raised while turning a presentation into Markdown.
"""

from typing import Optional


class SlideNotesError(Exception):
    """Base class for all errors raised by this package."""


class MalformedPackage(SlideNotesError):
    """A package-level part is missing or cannot be parsed.

    Nothing useful can be produced from such a package, so this aborts the run.
    """

    def __init__(self, partname: Optional[str], message: str):
        self.partname = partname
        if partname:
            message = f"{message} ({partname})"
        super().__init__(message)


class NotesDocumentError(SlideNotesError):
    """A notes-slide part exists but is not a readable notes document."""


class RenderError(SlideNotesError):
    """External slide export (Keynote, LibreOffice) failed."""


class ConversionError(SlideNotesError):
    """The input file cannot be converted on this machine."""
