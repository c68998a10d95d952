"""Derive the 13 oriented assets from the five canonical source images.

Every corner and edge source is drawn in its top-left (or left/top)
orientation; the other orientations are produced by clockwise rotation
followed by mirroring, after resizing to the tile size.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields
from typing import NamedTuple

from PIL import Image

from .config import validate_tile_size
from .errors import MalformedAssetError, MissingAllSourcesError

TRANSPARENT = (0, 0, 0, 0)


class SourceRole(enum.Enum):
    OUTER_CORNER = "outer_corner"
    INNER_CORNER = "inner_corner"
    EDGE_LEFT = "edge_left"
    EDGE_TOP = "edge_top"
    FILL = "fill"


class AssetId(enum.Enum):
    OUTER_TL = "outer_tl"
    OUTER_TR = "outer_tr"
    OUTER_BR = "outer_br"
    OUTER_BL = "outer_bl"
    INNER_TL = "inner_tl"
    INNER_TR = "inner_tr"
    INNER_BR = "inner_br"
    INNER_BL = "inner_bl"
    EDGE_L = "edge_l"
    EDGE_R = "edge_r"
    EDGE_T = "edge_t"
    EDGE_B = "edge_b"
    FILL = "fill"


class Orientation(NamedTuple):
    """How one asset is derived from its source role."""

    role: SourceRole
    rotation: int  # clockwise degrees, multiple of 90
    flip_x: bool = False
    flip_y: bool = False


ASSET_DERIVATIONS: dict[AssetId, Orientation] = {
    AssetId.OUTER_TL: Orientation(SourceRole.OUTER_CORNER, 0),
    AssetId.OUTER_TR: Orientation(SourceRole.OUTER_CORNER, 90),
    AssetId.OUTER_BR: Orientation(SourceRole.OUTER_CORNER, 180),
    AssetId.OUTER_BL: Orientation(SourceRole.OUTER_CORNER, 270),
    AssetId.INNER_TL: Orientation(SourceRole.INNER_CORNER, 0),
    AssetId.INNER_TR: Orientation(SourceRole.INNER_CORNER, 90),
    AssetId.INNER_BR: Orientation(SourceRole.INNER_CORNER, 180),
    AssetId.INNER_BL: Orientation(SourceRole.INNER_CORNER, 270),
    AssetId.EDGE_L: Orientation(SourceRole.EDGE_LEFT, 0),
    AssetId.EDGE_R: Orientation(SourceRole.EDGE_LEFT, 0, flip_x=True),
    AssetId.EDGE_T: Orientation(SourceRole.EDGE_TOP, 0),
    AssetId.EDGE_B: Orientation(SourceRole.EDGE_TOP, 0, flip_y=True),
    AssetId.FILL: Orientation(SourceRole.FILL, 0),
}

# PIL's ROTATE_* transposes turn counter-clockwise
_CLOCKWISE_TRANSPOSE: dict[int, Image.Transpose | None] = {
    0: None,
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


# ---------------------------------------------------------------------------
# Source configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SourceSet:
    """The caller-supplied source image for each role; ``None`` if absent."""

    outer_corner: Image.Image | None = None
    inner_corner: Image.Image | None = None
    edge_left: Image.Image | None = None
    edge_top: Image.Image | None = None
    fill: Image.Image | None = None

    @classmethod
    def from_mapping(
        cls, mapping: Mapping[SourceRole | str, Image.Image | None]
    ) -> SourceSet:
        kwargs: dict[str, Image.Image | None] = {}
        for key, image in mapping.items():
            try:
                role = key if isinstance(key, SourceRole) else SourceRole(key)
            except ValueError:
                raise ValueError(
                    f"Unknown source role '{key}'. "
                    f"Valid: {[r.value for r in SourceRole]}"
                ) from None
            kwargs[role.value] = image
        return cls(**kwargs)

    def get(self, role: SourceRole) -> Image.Image | None:
        return getattr(self, role.value)

    def present_roles(self) -> tuple[SourceRole, ...]:
        return tuple(r for r in SourceRole if self.get(r) is not None)

    def missing_roles(self) -> tuple[SourceRole, ...]:
        return tuple(r for r in SourceRole if self.get(r) is None)

    def __iter__(self) -> Iterator[tuple[SourceRole, Image.Image | None]]:
        for f in fields(self):
            yield SourceRole(f.name), getattr(self, f.name)


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------


def check_raster(image: object, label: str) -> Image.Image:
    """Reject anything that is not a non-empty Pillow image."""
    if not isinstance(image, Image.Image):
        raise MalformedAssetError(
            f"{label}: expected a PIL image, got {type(image).__name__}"
        )
    w, h = image.size
    if w <= 0 or h <= 0:
        raise MalformedAssetError(f"{label}: image has zero size ({w}x{h})")
    return image


def blank_tile(tile_size: int) -> Image.Image:
    return Image.new("RGBA", (tile_size, tile_size), TRANSPARENT)


def orient(
    source: Image.Image,
    tile_size: int,
    orientation: Orientation,
) -> Image.Image:
    """Resize *source* to a square tile, rotate clockwise, then mirror."""
    if orientation.rotation not in _CLOCKWISE_TRANSPOSE:
        raise ValueError(f"Rotation must be 0/90/180/270, got {orientation.rotation}")

    img = source.convert("RGBA").resize(
        (tile_size, tile_size),
        Image.Resampling.NEAREST,
    )
    transpose = _CLOCKWISE_TRANSPOSE[orientation.rotation]
    if transpose is not None:
        img = img.transpose(transpose)
    if orientation.flip_x:
        img = img.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    if orientation.flip_y:
        img = img.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
    return img


class AssetLibrary(Mapping):
    """Read-only ``AssetId -> Image`` mapping covering all 13 assets."""

    def __init__(
        self,
        images: Mapping[AssetId, Image.Image],
        tile_size: int,
        missing_roles: tuple[SourceRole, ...] = (),
    ):
        absent = [a.value for a in AssetId if a not in images]
        if absent:
            raise ValueError(f"Asset library is missing assets: {absent}")
        self._images = dict(images)
        self.tile_size = tile_size
        self.missing_roles = tuple(missing_roles)

    def __getitem__(self, key: AssetId | str) -> Image.Image:
        if not isinstance(key, AssetId):
            key = AssetId(key)
        return self._images[key]

    def __iter__(self) -> Iterator[AssetId]:
        return iter(AssetId)

    def __len__(self) -> int:
        return len(self._images)

    @property
    def is_partial(self) -> bool:
        return bool(self.missing_roles)


def build_asset_library(sources: SourceSet, tile_size: int) -> AssetLibrary:
    """Derive every oriented asset for one composition run.

    Absent roles yield fully transparent assets so composition can still
    run; if every role is absent there is nothing to draw and
    ``MissingAllSourcesError`` is raised.
    """
    tile_size = validate_tile_size(tile_size)

    present = sources.present_roles()
    if not present:
        raise MissingAllSourcesError("No source images supplied for any role")
    for role in present:
        check_raster(sources.get(role), f"Source '{role.value}'")

    images: dict[AssetId, Image.Image] = {}
    for asset_id, orientation in ASSET_DERIVATIONS.items():
        source = sources.get(orientation.role)
        if source is None:
            images[asset_id] = blank_tile(tile_size)
        else:
            images[asset_id] = orient(source, tile_size, orientation)

    return AssetLibrary(images, tile_size, sources.missing_roles())
