"""Autotile sheet generator.

Builds 16-tile (Basic4) and 47-tile (Blob8) autotile sheets from five
canonical source images: outer corner, inner corner, left edge, top edge
and fill.
"""

from .assets import AssetId, AssetLibrary, SourceRole, SourceSet, build_asset_library
from .config import DEFAULT_TILE_SIZE, GenerationConfig
from .errors import (
    AutotileError,
    InvalidSchemeError,
    InvalidTileSizeError,
    MalformedAssetError,
    MissingAllSourcesError,
)
from .masks import NeighborMask, Scheme, enumerate_masks
from .quadrants import Quadrant, resolve
from .sheet import compose_sheet, compose_tile, generate_sheet

__all__ = [
    "AssetId",
    "AssetLibrary",
    "AutotileError",
    "DEFAULT_TILE_SIZE",
    "GenerationConfig",
    "InvalidSchemeError",
    "InvalidTileSizeError",
    "MalformedAssetError",
    "MissingAllSourcesError",
    "NeighborMask",
    "Quadrant",
    "Scheme",
    "SourceRole",
    "SourceSet",
    "build_asset_library",
    "compose_sheet",
    "compose_tile",
    "enumerate_masks",
    "generate_sheet",
    "resolve",
]
