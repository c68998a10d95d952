"""Generation settings passed explicitly into the engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import InvalidTileSizeError
from .masks import Scheme, parse_scheme

if TYPE_CHECKING:
    from .assets import SourceSet

DEFAULT_TILE_SIZE = 64
DEFAULT_SCHEME = Scheme.BLOB8


def validate_tile_size(tile_size: object) -> int:
    """Return *tile_size* if it is a positive integer, else raise."""
    if isinstance(tile_size, bool) or not isinstance(tile_size, int):
        raise InvalidTileSizeError(
            f"tile_size must be a positive integer, got {tile_size!r}"
        )
    if tile_size <= 0:
        raise InvalidTileSizeError(f"tile_size must be positive, got {tile_size}")
    return tile_size


@dataclass(frozen=True)
class GenerationConfig:
    """Everything one composition run depends on."""

    sources: SourceSet
    scheme: Scheme = DEFAULT_SCHEME
    tile_size: int = DEFAULT_TILE_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "scheme", parse_scheme(self.scheme))
        validate_tile_size(self.tile_size)
