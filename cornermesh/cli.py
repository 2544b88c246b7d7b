# cornermesh/cli.py
from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .analysis import is_closed
from .config import SAMPLE_BOX, SAMPLE_CORNERS, load_config
from .export import save_obj
from .mesh import create_corner_mesh
from .params import BoxSpec, Corner, CornerSpec, InvalidSpecError, corners_from
from .texture import Material, Texture

logger = logging.getLogger(__name__)

_DEF_HELP = """
Examples:
  python -m cornermesh --out sample.obj
  python -m cornermesh --width 2000 --height 500 --depth 1000 \\
      --corner near-left=400:90 --corner far-right=120 --segments 45 --out box.obj
  python -m cornermesh --config box.json --texture wood.jpg --out box.obj
"""


def _parse_corner(text: str, default_segments: int) -> Tuple[Corner, CornerSpec]:
    name, sep, value = text.partition("=")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected NAME=RADIUS[:SEGMENTS], got {text!r}")
    radius, _, segments = value.partition(":")
    try:
        corner = Corner.parse(name)
        spec = CornerSpec(float(radius), int(segments) if segments else default_segments)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    return corner, spec


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cornermesh", description="cornermesh: prism with rounded vertical edges",
                                epilog=_DEF_HELP, formatter_class=argparse.RawTextHelpFormatter)
    p.add_argument("--config", help="JSON file with width/height/depth/corners")
    p.add_argument("--width", type=float)
    p.add_argument("--height", type=float)
    p.add_argument("--depth", type=float)
    p.add_argument("--corner", action="append", default=[], metavar="NAME=RADIUS[:SEGMENTS]",
                   help="near-left, far-left, near-right or far-right; repeatable")
    p.add_argument("--segments", type=int, default=32, help="Arc segments when a --corner omits them")
    p.add_argument("--texture", help="Image name for a textured material (not loaded, only referenced)")
    p.add_argument("--flat", action="store_true", help="Per-face normals instead of smooth")
    p.add_argument("--no-check", action="store_true", help="Build even if the corner radii are invalid")
    p.add_argument("--out", required=True, help="Output .obj path")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    if args.config:
        try:
            box, corners = load_config(args.config)
        except (OSError, ValueError) as e:
            p.error(f"cannot read {args.config}: {e}")
    elif args.width is None and args.height is None and args.depth is None and not args.corner:
        box, corners = SAMPLE_BOX, corners_from(SAMPLE_CORNERS)
    else:
        if None in (args.width, args.height, args.depth):
            p.error("--width, --height and --depth are required together")
        box = BoxSpec(args.width, args.height, args.depth)
        picked: Dict[Corner, CornerSpec] = {}
        for text in args.corner:
            try:
                corner, spec = _parse_corner(text, args.segments)
            except argparse.ArgumentTypeError as e:
                p.error(str(e))
            picked[corner] = spec
        corners = corners_from(picked)

    material = Material(texture=Texture(image=args.texture), name="textured") if args.texture else None
    try:
        mesh = create_corner_mesh(box, corners, material, check=not args.no_check, smooth=not args.flat)
    except InvalidSpecError as e:
        lines: List[str] = [v.message for v in e.violations]
        p.exit(2, "cornermesh: invalid box:\n  " + "\n  ".join(lines) + "\n")

    if not is_closed(mesh):
        logger.warning("mesh has open edges")
    save_obj(args.out, mesh)
    logger.info("wrote %s: %d triangles in %d groups", args.out, mesh.triangle_count, len(mesh.groups))
    return 0
