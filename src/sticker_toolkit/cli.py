"""
Module: cli

Purpose:
    Command-line front end for splitting generated sheets into stickers
    and composing stickers back into a sheet.

Commands:
    - split: SHEET -> OUT_DIR/sticker_01.png ... + OUT_DIR/sheet.png
    - compose: SLOT... -> OUT
    - regenerate: keep some stickers from a previous split, take the
      rest from a new sheet, write the merged set and its preview

Dependencies:
    - argparse (std)
    - logging (std)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from sticker_toolkit import __version__
from sticker_toolkit.builder import compose, merge_slots
from sticker_toolkit.codec import decode, encode
from sticker_toolkit.core.errors import ShapeMismatchError, StickerSheetError
from sticker_toolkit.core.models import DEFAULT_LAYOUT, GridLayout, RasterImage
from sticker_toolkit.extractor import ExtractionConfig, process_encoded_sheet

logger = logging.getLogger(__name__)

SLOT_PATTERN = "sticker_{:02d}.png"
SHEET_NAME = "sheet.png"


def _grid(text: str) -> GridLayout:
    try:
        return GridLayout.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _keep_indices(text: str) -> List[int]:
    """Parse one-based "1,3,5" into zero-based indices."""
    try:
        numbers = [int(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"--keep expects numbers like 1,3,5: {text!r}") from exc
    if any(n < 1 for n in numbers):
        raise argparse.ArgumentTypeError("Sticker numbers start at 1")
    return [n - 1 for n in numbers]


def _read_image(path: Path) -> RasterImage:
    return decode(path.read_bytes())


def _write_set(out_dir: Path, images: Sequence[RasterImage], layout: GridLayout) -> Path:
    """Write stickers and their composed preview; return the sheet path."""
    out_dir.mkdir(parents=True, exist_ok=True)
    for index, image in enumerate(images):
        (out_dir / SLOT_PATTERN.format(index + 1)).write_bytes(encode(image))
    sheet_path = out_dir / SHEET_NAME
    sheet_path.write_bytes(encode(compose(images, layout)))
    return sheet_path


def _cmd_split(args: argparse.Namespace) -> int:
    config = ExtractionConfig(aggressive=not args.conservative)
    result = process_encoded_sheet(args.sheet.read_bytes(), args.grid, config=config, sheet_id=args.sheet.name)
    sheet_path = _write_set(args.out_dir, result.images, args.grid)
    logger.info(f"Wrote {len(result.slots)} stickers and {sheet_path}")
    return 0


def _cmd_compose(args: argparse.Namespace) -> int:
    images = [_read_image(path) for path in args.slots]
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(encode(compose(images, args.grid)))
    logger.info(f"Composed {len(images)} stickers into {args.out}")
    return 0


def _cmd_regenerate(args: argparse.Namespace) -> int:
    if set(range(args.grid.cell_count)) <= set(args.keep):
        raise ShapeMismatchError("Every sticker is kept; nothing left to regenerate")
    previous = [
        _read_image(args.previous_dir / SLOT_PATTERN.format(i + 1))
        for i in range(args.grid.cell_count)
    ]
    result = process_encoded_sheet(args.sheet.read_bytes(), args.grid, sheet_id=args.sheet.name)
    merged = merge_slots(previous, result.images, keep=frozenset(args.keep))
    sheet_path = _write_set(args.out_dir, merged, args.grid)
    logger.info(f"Kept {len(set(args.keep))} stickers, regenerated {len(merged) - len(set(args.keep))}; preview at {sheet_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sticker-sheet",
        description="Split chroma-key sticker sheets and compose stickers back into sheets",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--grid", type=_grid, default=DEFAULT_LAYOUT,
        help=f"Grid as COLUMNSxROWS (default {DEFAULT_LAYOUT})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    split = sub.add_parser("split", help="Remove background and cut a sheet into stickers")
    split.add_argument("sheet", type=Path, help="Generated sheet image")
    split.add_argument("out_dir", type=Path, help="Directory for stickers")
    split.add_argument("--conservative", action="store_true", help="Use the narrow preview tolerance")
    split.set_defaults(func=_cmd_split)

    comp = sub.add_parser("compose", help="Lay stickers out on a sheet")
    comp.add_argument("out", type=Path, help="Output sheet path")
    comp.add_argument("slots", type=Path, nargs="+", help="Sticker images in reading order")
    comp.set_defaults(func=_cmd_compose)

    regen = sub.add_parser("regenerate", help="Merge kept stickers with a new sheet")
    regen.add_argument("previous_dir", type=Path, help="Directory from an earlier split")
    regen.add_argument("sheet", type=Path, help="Newly generated sheet image")
    regen.add_argument("out_dir", type=Path, help="Directory for the merged stickers")
    regen.add_argument("--keep", type=_keep_indices, default=[], help="Sticker numbers to keep, e.g. 1,3,5")
    regen.set_defaults(func=_cmd_regenerate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        return args.func(args)
    except StickerSheetError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    except OSError as exc:
        logger.error(f"File error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
