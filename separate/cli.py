from __future__ import annotations

import argparse
import os
import sys
import warnings
from pathlib import Path
from typing import List, Optional

from .config import BACKGROUNDS, CONNECTIVITIES, RenderConfig
from .errors import ConfigurationError, ContentWarning, SeparateError
from .pipeline import process_image


def _find_default_image() -> Optional[str]:
    env = os.getenv("INPUT_IMAGE")
    if env and Path(env).exists():
        return env
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="separate",
        description="Label every isolated white shape of a two-tone image and "
                    "write it as one combined map or one image per shape",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("image", nargs="?", help="Path to input image", default=None)
    parser.add_argument("output", nargs="?", help="Output image; per-shape modes write <stem>-<label><ext>",
                        default=None)
    parser.add_argument("--image", dest="image_opt", help="Alternative to positional image path")
    parser.add_argument("--output", dest="output_opt", help="Alternative to positional output path")
    parser.add_argument("-m", "--mode", type=int, default=3,
                        help="1 grey index map, 2 stretched grey map, 3 colour map, "
                             "4 one stretched image per shape, 5 one binary image per shape, "
                             "6 one coloured image per shape")
    parser.add_argument("-g", "--grid", type=int, default=None,
                        help="Probe a grid spaced this percent of width/height (1-99) instead of "
                             "scanning every pixel. Faster, may miss small shapes")
    parser.add_argument("-t", "--trim", action="store_true",
                        help="Crop each per-shape image to its bounding box plus a 5px border (modes 4-6)")
    parser.add_argument("--keep_canvas", action="store_true",
                        help="Keep the original-frame offset of trimmed images (written to <stem>.canvas.json)")
    parser.add_argument("--list_canvas", action="store_true",
                        help="Print WIDTHxHEIGHT+X+Y for every trimmed image (needs --trim --keep_canvas)")
    parser.add_argument("-b", "--background", choices=BACKGROUNDS, default="black",
                        help="Background of per-shape images")
    parser.add_argument("-s", "--spread", dest="exponent", type=int, default=1,
                        help="Push low labels away from the black end of the colour ramp "
                             "(about 6 suits ~25 shapes)")
    parser.add_argument("--connectivity", type=int, choices=CONNECTIVITIES, default=4,
                        help="Flood-fill neighbourhood; 8 joins diagonally touching shapes")
    parser.add_argument("--negate", action="store_true",
                        help="Separate black shapes on white instead of white on black")
    parser.add_argument("--metadata", default=None,
                        help="Optional JSON file describing each shape (bbox, area, centroid)")
    return parser


def _error(msg: str) -> None:
    print(f"ERROR: {msg}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    img_path = args.image_opt or args.image or _find_default_image()
    out_path = args.output_opt or args.output
    if args.image_opt and args.image and not out_path:
        # --image given, so the lone positional is the output
        out_path = args.image
    if not img_path or not out_path:
        parser.print_help(sys.stderr)
        _error("Both an input image and an output path are required. "
               "Provide them positionally (or via --image / --output, or set INPUT_IMAGE).")
        return 2

    try:
        config = RenderConfig(
            mode=args.mode,
            background=args.background,
            exponent=args.exponent,
            trim=args.trim,
            keep_canvas=args.keep_canvas,
            list_canvas=args.list_canvas,
            grid=args.grid,
            connectivity=args.connectivity,
        )
    except ConfigurationError as e:
        _error(str(e))
        return 2

    if config.trim and not config.per_label:
        print(f"WARNING: --trim only applies to modes 4-6; ignored for mode {config.mode}", file=sys.stderr)

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", ContentWarning)
            try:
                result = process_image(img_path, out_path, config,
                                       negate=args.negate, metadata_path=args.metadata)
            finally:
                for w in caught:
                    print(f"WARNING: {w.message}", file=sys.stderr)
    except SeparateError as e:
        _error(str(e))
        return 1

    for line in result.listing:
        print(line)
    if len(result.paths) == 1:
        print(f"[OK] Saved: {result.paths[0]}")
    else:
        print(f"[OK] Saved {len(result.paths)} images: {result.paths[0]} .. {result.paths[-1]}")
    for p in result.extras:
        print(f"  • {p}")
    print(f"Shapes found: {result.count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
