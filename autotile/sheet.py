"""Compose tiles and pack them into the output sheet."""

from __future__ import annotations

import math
from collections.abc import Sequence

from PIL import Image

from .assets import TRANSPARENT, AssetId, AssetLibrary, build_asset_library
from .config import GenerationConfig, validate_tile_size
from .errors import MalformedAssetError
from .masks import NeighborMask, columns_for, enumerate_masks
from .quadrants import resolve_mask

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _check_columns(columns: int) -> int:
    if isinstance(columns, bool) or not isinstance(columns, int) or columns <= 0:
        raise ValueError(f"columns must be a positive integer, got {columns!r}")
    return columns


def sheet_dimensions(count: int, tile_size: int, columns: int) -> tuple[int, int]:
    """Pixel size of a sheet holding *count* tiles."""
    tile_size = validate_tile_size(tile_size)
    columns = _check_columns(columns)
    rows = math.ceil(count / columns)
    return columns * tile_size, rows * tile_size


def cell_origin(index: int, tile_size: int, columns: int) -> tuple[int, int]:
    """Top-left pixel of cell *index* in row-major order."""
    return (index % columns) * tile_size, (index // columns) * tile_size


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def _paste_region(
    dest: Image.Image,
    asset: Image.Image,
    rect: tuple[int, int, int, int],
    origin: tuple[int, int],
    layered: bool = True,
) -> None:
    x, y, w, h = rect
    pos = (origin[0] + x, origin[1] + y)
    if layered:
        # source-over, so a translucent piece over opaque fill stays opaque
        dest.alpha_composite(asset, dest=pos, source=(x, y, x + w, y + h))
    else:
        dest.paste(asset.crop((x, y, x + w, y + h)), pos)


def _check_library(library: AssetLibrary, tile_size: int) -> None:
    for asset_id in AssetId:
        size = library[asset_id].size
        if size != (tile_size, tile_size):
            raise MalformedAssetError(
                f"Asset '{asset_id.value}' is {size[0]}x{size[1]}, "
                f"expected {tile_size}x{tile_size}"
            )


def draw_tile(
    dest: Image.Image,
    origin: tuple[int, int],
    mask: NeighborMask,
    library: AssetLibrary,
    tile_size: int,
) -> None:
    """Draw one composed tile onto *dest* with its top-left at *origin*.

    Each quadrant gets the fill piece first, then the resolved piece on
    top, so transparent parts of an incomplete library show fill instead
    of holes.
    """
    fill = library[AssetId.FILL]
    for asset_id, rect in resolve_mask(mask, tile_size).values():
        _paste_region(dest, fill, rect, origin, layered=False)
        if asset_id is not AssetId.FILL:
            _paste_region(dest, library[asset_id], rect, origin)


def compose_tile(
    mask: NeighborMask,
    library: AssetLibrary,
    tile_size: int,
) -> Image.Image:
    """Return a single composed tile for *mask*."""
    tile_size = validate_tile_size(tile_size)
    _check_library(library, tile_size)
    tile = Image.new("RGBA", (tile_size, tile_size), TRANSPARENT)
    draw_tile(tile, (0, 0), mask, library, tile_size)
    return tile


def compose_sheet(
    masks: Sequence[NeighborMask],
    library: AssetLibrary,
    tile_size: int,
    columns: int,
) -> Image.Image:
    """Pack one composed tile per mask, in the given order, into a sheet.

    Cells past the last mask stay fully transparent.
    """
    width, height = sheet_dimensions(len(masks), tile_size, columns)
    _check_library(library, tile_size)

    sheet = Image.new("RGBA", (width, height), TRANSPARENT)
    for idx, mask in enumerate(masks):
        origin = cell_origin(idx, tile_size, columns)
        draw_tile(sheet, origin, mask, library, tile_size)
    return sheet


def generate_sheet(config: GenerationConfig) -> Image.Image:
    """Enumerate, derive assets and compose in one call."""
    masks = enumerate_masks(config.scheme)
    library = build_asset_library(config.sources, config.tile_size)
    return compose_sheet(masks, library, config.tile_size, columns_for(config.scheme))


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


def verify_sheet(
    sheet: Image.Image,
    masks: Sequence[NeighborMask],
    tile_size: int,
    columns: int,
) -> list[str]:
    """Return warnings for composed tiles that came out fully transparent."""
    empty: list[int] = []
    for idx in range(len(masks)):
        x, y = cell_origin(idx, tile_size, columns)
        tile = sheet.crop((x, y, x + tile_size, y + tile_size))
        if tile.getchannel("A").getextrema()[1] == 0:
            empty.append(idx)

    if not empty:
        return []
    shown = empty[:10]
    return [f"{len(empty)} of {len(masks)} tiles are fully transparent: {shown}"]
