import argparse
import sys
from typing import List, Optional

from .config import INCLUDE_PLACEHOLDERS, LOG_LEVEL, RENDERER_CHOICES, SLIDE_RENDERER
from .deck_converter import DeckConverter
from .errors import SlideNotesError
from .logging_config import setup_logging
from .renderers import select_renderer


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="slides-to-markdown",
        description="Convert a Keynote (.key) or PowerPoint (.pptx) deck into Markdown pairing slide images with speaker notes"
    )
    parser.add_argument(
        "input",
        type=str,
        help="Keynote or PowerPoint file to convert"
    )
    parser.add_argument(
        "output_dir",
        type=str,
        nargs="?",
        default=None,
        help="Output directory (default: the input file's directory)"
    )
    parser.add_argument(
        "--renderer",
        choices=RENDERER_CHOICES,
        default=SLIDE_RENDERER,
        help="How slide images are produced (default: %(default)s)"
    )
    parser.add_argument(
        "--no-placeholders",
        action="store_true",
        default=not INCLUDE_PLACEHOLDERS,
        help="Leave notes empty instead of explaining why they could not be read"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=LOG_LEVEL,
        help="Logging level (default: %(default)s)"
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        converter = DeckConverter(
            renderer=None if args.renderer == 'auto' else select_renderer(args.renderer),
            include_placeholders=not args.no_placeholders,
        )
        markdown_path = converter.convert(args.input, args.output_dir)
    except SlideNotesError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Markdown file generated: {markdown_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
