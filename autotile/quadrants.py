"""Per-quadrant asset selection.

Each quadrant of a composed tile looks at three neighbors: the vertical
one, the horizontal one and the diagonal between them. That triple alone
picks the oriented asset whose like-named quadrant is copied.
"""

from __future__ import annotations

import enum
from typing import NamedTuple

from .assets import AssetId
from .masks import NeighborMask

Rect = tuple[int, int, int, int]  # x, y, width, height


class Quadrant(enum.Enum):
    TL = "tl"
    TR = "tr"
    BL = "bl"
    BR = "br"

    @property
    def is_top(self) -> bool:
        return self in (Quadrant.TL, Quadrant.TR)

    @property
    def is_left(self) -> bool:
        return self in (Quadrant.TL, Quadrant.BL)


class QuadrantRule(NamedTuple):
    """Which mask fields and assets apply to one quadrant."""

    vertical: str  # mask field: n or s
    horizontal: str  # mask field: w or e
    diagonal: str  # mask field between them
    outer: AssetId  # neither neighbor
    edge_h: AssetId  # horizontal neighbor only
    edge_v: AssetId  # vertical neighbor only
    inner: AssetId  # both neighbors, no diagonal


QUADRANT_RULES: dict[Quadrant, QuadrantRule] = {
    Quadrant.TL: QuadrantRule(
        "n", "w", "nw", AssetId.OUTER_TL, AssetId.EDGE_T, AssetId.EDGE_L, AssetId.INNER_TL
    ),
    Quadrant.TR: QuadrantRule(
        "n", "e", "ne", AssetId.OUTER_TR, AssetId.EDGE_T, AssetId.EDGE_R, AssetId.INNER_TR
    ),
    Quadrant.BL: QuadrantRule(
        "s", "w", "sw", AssetId.OUTER_BL, AssetId.EDGE_B, AssetId.EDGE_L, AssetId.INNER_BL
    ),
    Quadrant.BR: QuadrantRule(
        "s", "e", "se", AssetId.OUTER_BR, AssetId.EDGE_B, AssetId.EDGE_R, AssetId.INNER_BR
    ),
}


def _build_table(rule: QuadrantRule) -> dict[tuple[bool, bool, bool], AssetId]:
    """Spell out all eight (vertical, horizontal, diagonal) cases."""
    return {
        (False, False, False): rule.outer,
        (False, False, True): rule.outer,
        (False, True, False): rule.edge_h,
        (False, True, True): rule.edge_h,
        (True, False, False): rule.edge_v,
        (True, False, True): rule.edge_v,
        (True, True, False): rule.inner,
        (True, True, True): AssetId.FILL,
    }


DECISION_TABLES: dict[Quadrant, dict[tuple[bool, bool, bool], AssetId]] = {
    quadrant: _build_table(rule) for quadrant, rule in QUADRANT_RULES.items()
}


def sub_rect(quadrant: Quadrant, tile_size: int) -> Rect:
    """Region of a tile covered by *quadrant*.

    Right and bottom quadrants take the extra pixel of an odd tile size.
    """
    half = tile_size // 2
    x = 0 if quadrant.is_left else half
    y = 0 if quadrant.is_top else half
    w = half if quadrant.is_left else tile_size - half
    h = half if quadrant.is_top else tile_size - half
    return x, y, w, h


def quadrant_bits(mask: NeighborMask, quadrant: Quadrant) -> tuple[bool, bool, bool]:
    """Read (vertical, horizontal, diagonal) for *quadrant* from *mask*."""
    rule = QUADRANT_RULES[quadrant]
    return (
        getattr(mask, rule.vertical),
        getattr(mask, rule.horizontal),
        getattr(mask, rule.diagonal),
    )


def resolve(
    quadrant: Quadrant,
    vertical: bool,
    horizontal: bool,
    diagonal: bool,
    tile_size: int,
) -> tuple[AssetId, Rect]:
    """Pick the asset and the sub-rectangle to sample for one quadrant."""
    key = (bool(vertical), bool(horizontal), bool(diagonal))
    return DECISION_TABLES[quadrant][key], sub_rect(quadrant, tile_size)


def resolve_mask(
    mask: NeighborMask, tile_size: int
) -> dict[Quadrant, tuple[AssetId, Rect]]:
    """Resolve all four quadrants of one tile."""
    return {
        quadrant: resolve(quadrant, *quadrant_bits(mask, quadrant), tile_size)
        for quadrant in Quadrant
    }
