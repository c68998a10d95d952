"""Neighbor masks and the tile-set enumeration for both schemes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from .errors import InvalidSchemeError

# ---------------------------------------------------------------------------
# Constants: enumeration bit order
# ---------------------------------------------------------------------------

N = 1
W = 2
E = 4
S = 8
NW = 16
NE = 32
SW = 64
SE = 128

BLOB8_TILE_COUNT = 47


class Scheme(enum.Enum):
    """Supported tiling schemes, valued by their tile count."""

    BASIC4 = "16"
    BLOB8 = "47"


SCHEME_COLUMNS: dict[Scheme, int] = {
    Scheme.BASIC4: 4,
    Scheme.BLOB8: 8,
}

_SCHEME_ALIASES: dict[str, Scheme] = {
    "16": Scheme.BASIC4,
    "basic4": Scheme.BASIC4,
    "47": Scheme.BLOB8,
    "blob8": Scheme.BLOB8,
}


def parse_scheme(value: Scheme | str | int) -> Scheme:
    """Normalise a scheme given as enum, tile count or name."""
    if isinstance(value, Scheme):
        return value
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidSchemeError(f"Unknown scheme: {value!r}")
    key = str(value).strip().lower()
    try:
        return _SCHEME_ALIASES[key]
    except KeyError:
        raise InvalidSchemeError(
            f"Unknown scheme: {value!r} (expected one of {sorted(_SCHEME_ALIASES)})"
        ) from None


def columns_for(scheme: Scheme | str | int) -> int:
    """Number of sheet columns used by a scheme."""
    return SCHEME_COLUMNS[parse_scheme(scheme)]


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NeighborMask:
    """Which of the eight surrounding cells share the tile's terrain."""

    n: bool = False
    e: bool = False
    s: bool = False
    w: bool = False
    nw: bool = False
    ne: bool = False
    sw: bool = False
    se: bool = False

    @classmethod
    def from_bits(cls, value: int) -> NeighborMask:
        return cls(
            n=bool(value & N),
            e=bool(value & E),
            s=bool(value & S),
            w=bool(value & W),
            nw=bool(value & NW),
            ne=bool(value & NE),
            sw=bool(value & SW),
            se=bool(value & SE),
        )

    @property
    def bits(self) -> int:
        value = 0
        for flag, bit in (
            (self.n, N),
            (self.w, W),
            (self.e, E),
            (self.s, S),
            (self.nw, NW),
            (self.ne, NE),
            (self.sw, SW),
            (self.se, SE),
        ):
            if flag:
                value |= bit
        return value

    def is_valid_blob(self) -> bool:
        """A diagonal may only be set when both adjacent orthogonals are."""
        if self.nw and not (self.n and self.w):
            return False
        if self.ne and not (self.n and self.e):
            return False
        if self.sw and not (self.s and self.w):
            return False
        if self.se and not (self.s and self.e):
            return False
        return True


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------


def _enumerate_basic4() -> tuple[NeighborMask, ...]:
    # diagonals cannot break in this scheme
    return tuple(
        replace(NeighborMask.from_bits(i), nw=True, ne=True, sw=True, se=True)
        for i in range(16)
    )


def _enumerate_blob8() -> tuple[NeighborMask, ...]:
    masks = tuple(
        mask
        for mask in (NeighborMask.from_bits(i) for i in range(256))
        if mask.is_valid_blob()
    )
    if len(masks) != BLOB8_TILE_COUNT:
        raise RuntimeError(
            f"Expected {BLOB8_TILE_COUNT} blob masks, got {len(masks)}"
        )
    return masks


def enumerate_masks(scheme: Scheme | str | int) -> tuple[NeighborMask, ...]:
    """Return the ordered masks for *scheme*.

    The position of a mask in the result is its cell index in the sheet,
    so the order is part of the output format.
    """
    scheme = parse_scheme(scheme)
    if scheme is Scheme.BASIC4:
        return _enumerate_basic4()
    return _enumerate_blob8()


def describe_mask(mask: NeighborMask) -> str:
    """Human-readable description of a mask."""
    names = [
        name
        for name, flag in [
            ("N", mask.n),
            ("NE", mask.ne),
            ("E", mask.e),
            ("SE", mask.se),
            ("S", mask.s),
            ("SW", mask.sw),
            ("W", mask.w),
            ("NW", mask.nw),
        ]
        if flag
    ]
    return "+".join(names) if names else "isolated"
