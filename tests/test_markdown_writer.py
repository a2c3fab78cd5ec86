"""
Tests for assembling the Markdown document.
"""
import pytest

from pptx_factory import BR, deck_parts, notes_xml, presentation_xml, shape_xml
from slidenotes.errors import MalformedPackage
from slidenotes.markdown_writer import (
    MISSING_RELATIONSHIP_MESSAGE,
    NO_CONTENT_MESSAGE,
    NOTES_PART_MISSING_MESSAGE,
    UNREADABLE_NOTES_MESSAGE,
    SlideNotes,
    assemble_markdown,
    extract_notes_markdown,
    image_name_for,
)


class TestImageNameFor:

    def test_uses_supplied_name(self):
        assert image_name_for(2, ["a.png", "b.jpg"]) == "b.jpg"

    def test_falls_back_when_list_is_short(self):
        assert image_name_for(3, ["001.png", "002.png"]) == "003.png"

    def test_falls_back_for_missing_entry(self):
        assert image_name_for(2, ["001.png", None, "003.png"]) == "002.png"

    def test_pads_to_three_digits(self):
        assert image_name_for(7, []) == "007.png"
        assert image_name_for(123, []) == "123.png"


class TestAssembleMarkdown:

    def test_blocks_pair_images_and_notes(self):
        slides = [SlideNotes(1, "First notes"), SlideNotes(2, "Second\n\nnotes")]

        markdown = assemble_markdown(slides, ["001.png", "002.png"], "images", True)

        assert markdown == (
            "![](images/001.png)\n\nFirst notes\n\n"
            "![](images/002.png)\n\nSecond\n\nnotes"
        )

    def test_slide_without_notes_is_image_only(self):
        slides = [SlideNotes(1), SlideNotes(2, "notes")]

        markdown = assemble_markdown(slides, [], "images", True)

        assert markdown == "![](images/001.png)\n\n![](images/002.png)\n\nnotes"

    def test_placeholders_can_be_disabled(self):
        slides = [SlideNotes(1, placeholder=NOTES_PART_MISSING_MESSAGE)]

        assert assemble_markdown(slides, [], "images", True) == (
            f"![](images/001.png)\n\n{NOTES_PART_MISSING_MESSAGE}"
        )
        assert assemble_markdown(slides, [], "images", False) == "![](images/001.png)"

    def test_custom_images_directory(self):
        assert assemble_markdown([SlideNotes(1)], ["x.png"], "slides", True) == "![](slides/x.png)"

    def test_no_slides(self):
        assert assemble_markdown([], ["001.png"], "images", True) == ""


class TestExtractNotesMarkdown:

    def test_three_slides_two_images(self, make_deck):
        path = make_deck([["one"], ["two"], ["three"]])

        markdown = extract_notes_markdown(path, ["001.png", "002.png"], "images", True)

        assert markdown == (
            "![](images/001.png)\n\none\n\n"
            "![](images/002.png)\n\ntwo\n\n"
            "![](images/003.png)\n\nthree"
        )

    def test_line_breaks_in_notes(self, make_deck):
        path = make_deck([[["A", BR, "B"], "C"]])

        markdown = extract_notes_markdown(path, ["001.png"], "images", True)

        assert markdown == "![](images/001.png)\n\nA\n\n\n\nB\n\nC"

    def test_trailing_line_break_is_trimmed(self, make_deck):
        path = make_deck([[["A", BR]], ["B"]])

        markdown = extract_notes_markdown(path, [], "images", True)

        assert markdown == "![](images/001.png)\n\nA\n\n![](images/002.png)\n\nB"

    def test_unresolvable_slide_keeps_its_block(self, make_pptx):
        parts = deck_parts([["one"], ["two"], ["three"]])
        parts['ppt/presentation.xml'] = presentation_xml(['rId2', 'rIdMissing', 'rId4'])
        path = make_pptx(parts)

        markdown = extract_notes_markdown(path, [], "images", True)

        assert markdown == (
            "![](images/001.png)\n\none\n\n"
            f"![](images/002.png)\n\n{MISSING_RELATIONSHIP_MESSAGE}\n\n"
            "![](images/003.png)\n\nthree"
        )

    def test_unresolvable_slide_without_placeholders(self, make_pptx):
        parts = deck_parts([["one"], ["two"]])
        parts['ppt/presentation.xml'] = presentation_xml([None, 'rId3'])
        path = make_pptx(parts)

        markdown = extract_notes_markdown(path, [], "images", False)

        assert markdown == "![](images/001.png)\n\n![](images/002.png)\n\ntwo"

    def test_slide_without_notes_page_has_no_placeholder(self, make_deck):
        path = make_deck([None, ["two"]])

        markdown = extract_notes_markdown(path, [], "images", True)

        assert markdown == "![](images/001.png)\n\n![](images/002.png)\n\ntwo"

    def test_unreadable_notes_page(self, make_pptx):
        parts = deck_parts([["one"]])
        parts['ppt/notesSlides/notesSlide1.xml'] = '<p:notes'
        path = make_pptx(parts)

        markdown = extract_notes_markdown(path, [], "images", True)

        assert markdown == f"![](images/001.png)\n\n{UNREADABLE_NOTES_MESSAGE}"

    def test_corrupt_notes_page_does_not_stop_later_slides(self, make_corrupt_pptx):
        path = make_corrupt_pptx(deck_parts([["one"], ["two"]]), 'ppt/notesSlides/notesSlide1.xml')

        markdown = extract_notes_markdown(path, [], "images", True)

        assert markdown == (
            f"![](images/001.png)\n\n{UNREADABLE_NOTES_MESSAGE}\n\n"
            "![](images/002.png)\n\ntwo"
        )

    def test_notes_page_without_text(self, make_pptx):
        parts = deck_parts([["one"]])
        parts['ppt/notesSlides/notesSlide1.xml'] = notes_xml(shape_xml(2, 'Slide Image', ph_type='sldImg'))
        path = make_pptx(parts)

        markdown = extract_notes_markdown(path, [], "images", True)

        assert markdown == f"![](images/001.png)\n\n{NO_CONTENT_MESSAGE}"

    def test_repeated_runs_are_identical(self, make_pptx):
        parts = deck_parts([["one", ["a", BR, "b"]], None, ["three"]])
        parts['ppt/presentation.xml'] = presentation_xml(['rId2', 'rId3', None, 'rId4'])
        path = make_pptx(parts)

        first = extract_notes_markdown(path, ["001.png"], "images", True)
        second = extract_notes_markdown(path, ["001.png"], "images", True)

        assert first.encode('utf-8') == second.encode('utf-8')

    def test_malformed_package_propagates(self, make_pptx):
        parts = deck_parts([["one"]])
        del parts['ppt/_rels/presentation.xml.rels']

        with pytest.raises(MalformedPackage):
            extract_notes_markdown(make_pptx(parts), [], "images", True)
