"""
pytest configuration for slidenotes.
"""
import zipfile

import pytest

from pptx_factory import corrupt_part, deck_parts, write_pptx
from slidenotes.extractors import PptxPackage


@pytest.fixture
def make_pptx(tmp_path):
    """Write a PPTX from a part dict and return its path."""
    def _make(parts, name="deck.pptx"):
        return write_pptx(tmp_path / name, parts)
    return _make


@pytest.fixture
def make_corrupt_pptx(tmp_path):
    """Write a PPTX from a part dict with one member's bytes damaged."""
    def _make(parts, damaged, name="deck.pptx"):
        path = write_pptx(tmp_path / name, parts, zipfile.ZIP_STORED)
        return corrupt_part(path, damaged)
    return _make


@pytest.fixture
def make_deck(make_pptx):
    """Write a regular deck: one entry of notes paragraphs (or None) per slide."""
    def _make(notes, name="deck.pptx"):
        return make_pptx(deck_parts(notes), name)
    return _make


@pytest.fixture
def open_package():
    """Open packages and close them after the test."""
    opened = []

    def _open(path):
        package = PptxPackage.open(path)
        opened.append(package)
        return package

    yield _open
    for package in opened:
        package.close()
