import argparse
import logging
import sys

from slascii.converter import DEFAULT_CHARS, CharacterBudget, FixedWidth, make_art
from slascii.errors import SlasciiError
from slascii.palettes import DEFAULT_PALETTE, PALETTES, get_palette
from slascii.search import DEFAULT_MAX_WIDTH


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slascii", description="Render an image as ASCII art sized for chat messages")
    parser.add_argument("image", help="Path to input image")
    sizing = parser.add_mutually_exclusive_group()
    sizing.add_argument(
        "-c",
        "--chars",
        type=_positive_int,
        default=None,
        help=f"Maximum number of characters to output (default: {DEFAULT_CHARS}, the Slack message limit)",
    )
    sizing.add_argument("-w", "--width", type=_positive_int, default=None, help="Output width in glyphs")
    parser.add_argument(
        "-p",
        "--palette",
        default=DEFAULT_PALETTE,
        choices=list(PALETTES),
        help=f"Glyph palette to use (default: {DEFAULT_PALETTE})",
    )
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Invert colours")
    parser.add_argument(
        "-b",
        "--no-banner",
        dest="banner",
        action="store_false",
        default=True,
        help="Do not print the character count below the output",
    )
    parser.add_argument(
        "--max-width",
        type=_positive_int,
        default=DEFAULT_MAX_WIDTH,
        help=f"Widest output to consider when fitting to --chars (default: {DEFAULT_MAX_WIDTH})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Debugging output")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s")

    palette = get_palette(args.palette, invert=args.invert)
    if args.width is not None:
        sizing = FixedWidth(args.width)
    else:
        sizing = CharacterBudget(args.chars or DEFAULT_CHARS, max_width=args.max_width)

    try:
        rendering = make_art(args.image, palette, sizing)
    except SlasciiError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        sys.exit(1)

    print(rendering.text)
    if args.banner:
        print(f"\n\n({len(rendering)} chars)")


if __name__ == "__main__":
    main()
