"""Command-line front end: build an autotile sheet PNG.

Usage:
    autotile-sheet tileset.json -o output.png
    autotile-sheet --outer-corner oc.png --inner-corner ic.png \\
        --edge-left el.png --edge-top et.png --fill fill.png --scheme 16
    autotile-sheet --list --scheme 47
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .assets import SourceRole, SourceSet, build_asset_library
from .config import DEFAULT_TILE_SIZE, GenerationConfig
from .masks import Scheme, columns_for, describe_mask, enumerate_masks, parse_scheme
from .sheet import compose_sheet, verify_sheet
from .sources import load_manifest, load_source_image, validate_sources

DEFAULT_OUTPUT_NAME = "autotile_set.png"

_ROLE_FLAGS: dict[SourceRole, str] = {
    SourceRole.OUTER_CORNER: "outer_corner",
    SourceRole.INNER_CORNER: "inner_corner",
    SourceRole.EDGE_LEFT: "edge_left",
    SourceRole.EDGE_TOP: "edge_top",
    SourceRole.FILL: "fill",
}


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def list_tiles(scheme: Scheme) -> None:
    """Print every mask of *scheme* with its sheet cell."""
    columns = columns_for(scheme)
    masks = enumerate_masks(scheme)
    print(f"Scheme {scheme.value}: {len(masks)} tiles, {columns} columns")
    for idx, mask in enumerate(masks):
        col, row = idx % columns, idx // columns
        print(f"  {idx:2d}  col {col} row {row}  bits {mask.bits:3d}  {describe_mask(mask)}")


def _with_role_flags(config_images: dict, args: argparse.Namespace) -> SourceSet:
    """Overlay images named by the per-role flags onto *config_images*."""
    images = dict(config_images)
    for role, attr in _ROLE_FLAGS.items():
        path = getattr(args, attr)
        if path is not None:
            images[role] = load_source_image(path)
    return SourceSet.from_mapping(images)


def process_single(args: argparse.Namespace) -> Path:
    """Load sources, compose the sheet and save it. Returns the output path."""
    if args.input is not None:
        print(f"Loading manifest: {args.input}")
        manifest_config = load_manifest(args.input, scheme=args.scheme, tile_size=args.tile_size)
        config = GenerationConfig(
            sources=_with_role_flags(dict(manifest_config.sources), args),
            scheme=manifest_config.scheme,
            tile_size=manifest_config.tile_size,
        )
        output_path = args.output or args.input.with_name(DEFAULT_OUTPUT_NAME)
    else:
        config = GenerationConfig(
            sources=_with_role_flags({}, args),
            scheme=args.scheme or Scheme.BLOB8,
            tile_size=DEFAULT_TILE_SIZE if args.tile_size is None else args.tile_size,
        )
        output_path = args.output or Path(DEFAULT_OUTPUT_NAME)

    scheme = config.scheme
    print(f"  Scheme: {scheme.value}-tile")
    print(f"  Tile size: {config.tile_size}x{config.tile_size}")
    print(f"  Roles loaded: {[r.value for r in config.sources.present_roles()]}")

    for warn in validate_sources(config.sources):
        print(f"  ⚠ {warn}")

    library = build_asset_library(config.sources, config.tile_size)
    if library.is_partial:
        for role in library.missing_roles:
            print(f"  ⚠ Missing source role: {role.value} (its parts stay blank)")

    masks = enumerate_masks(scheme)
    columns = columns_for(scheme)
    sheet = compose_sheet(masks, library, config.tile_size, columns)
    for warn in verify_sheet(sheet, masks, config.tile_size, columns):
        print(f"  ⚠ {warn}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(output_path)
    print(f"  Saved sheet: {output_path} ({sheet.width}x{sheet.height}, {len(masks)} tiles)")
    return output_path


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _scheme_arg(value: str) -> Scheme:
    try:
        return parse_scheme(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="autotile-sheet",
        description="Generate a 16- or 47-tile autotile sheet from five source images.",
        epilog=(
            "Examples:\n"
            "  autotile-sheet tileset.json -o output.png\n"
            "  autotile-sheet --outer-corner oc.png --fill fill.png --scheme 16\n"
            "  autotile-sheet --list --scheme 47"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="JSON manifest naming the scheme, tile size and source images",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help=f"Output sheet path (default: {DEFAULT_OUTPUT_NAME})",
    )
    p.add_argument(
        "--scheme",
        type=_scheme_arg,
        default=None,
        help="Tiling scheme: 16 (Basic4) or 47 (Blob8); default 47",
    )
    p.add_argument(
        "--tile-size",
        type=int,
        default=None,
        help=f"Tile edge length in pixels (default: manifest value or {DEFAULT_TILE_SIZE})",
    )
    p.add_argument("--outer-corner", type=Path, default=None, help="Outer corner image (top-left)")
    p.add_argument("--inner-corner", type=Path, default=None, help="Inner corner image (top-left)")
    p.add_argument("--edge-left", type=Path, default=None, help="Left edge image")
    p.add_argument("--edge-top", type=Path, default=None, help="Top edge image")
    p.add_argument("--fill", type=Path, default=None, help="Fill (center) image")
    p.add_argument(
        "--list",
        action="store_true",
        help="Print the tile order for the scheme and exit",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list:
        list_tiles(args.scheme or Scheme.BLOB8)
        return

    try:
        process_single(args)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
