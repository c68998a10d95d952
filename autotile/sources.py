"""Loading source images from disk and from JSON manifests.

A manifest names the scheme, the tile size and one file per role. A role
may point into a larger sheet by giving a ``region``::

    {
      "scheme": "47",
      "tile_size": 32,
      "sources": {
        "outer_corner": "corner.png",
        "fill": {"file": "terrain.png", "region": [64, 0, 32, 32]}
      }
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NamedTuple

from PIL import Image

from .assets import SourceRole, SourceSet
from .config import DEFAULT_SCHEME, DEFAULT_TILE_SIZE, GenerationConfig


class Region(NamedTuple):
    """Rectangle carved out of a larger source sheet."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def parse(cls, raw: object) -> Region:
        if not isinstance(raw, (list, tuple)) or len(raw) != 4:
            raise ValueError(f"region must be [x, y, width, height], got {raw!r}")
        if any(isinstance(v, bool) or not isinstance(v, int) for v in raw):
            raise ValueError(f"region values must be integers, got {raw!r}")
        return cls(*raw)


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def crop_region(image: Image.Image, region: Region) -> Image.Image:
    """Cut *region* out of *image*; the region must lie fully inside it."""
    x, y, w, h = region
    if w <= 0 or h <= 0:
        raise ValueError(f"region {tuple(region)} has non-positive size")
    if x < 0 or y < 0 or x + w > image.width or y + h > image.height:
        raise ValueError(
            f"region {tuple(region)} is outside the {image.width}x{image.height} image"
        )
    return image.crop((x, y, x + w, y + h))


def load_source_image(path: Path, region: Region | None = None) -> Image.Image:
    """Open a PNG as RGBA, optionally cropped to *region*."""
    if not path.exists():
        raise FileNotFoundError(f"Source image not found: {path}")

    img = Image.open(path)
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    img.load()  # read pixels into memory, release file handle

    if region is not None:
        img = crop_region(img, region)
    return img


# ---------------------------------------------------------------------------
# JSON manifest
# ---------------------------------------------------------------------------


def _parse_source_entry(role: str, entry: object) -> tuple[str, Region | None]:
    if isinstance(entry, str):
        return entry, None
    if isinstance(entry, dict):
        if "file" not in entry:
            raise ValueError(f"Source '{role}': missing required field 'file'")
        region = Region.parse(entry["region"]) if "region" in entry else None
        return entry["file"], region
    raise ValueError(
        f"Source '{role}': expected a file name or an object, got {type(entry).__name__}"
    )


def parse_manifest(path: Path) -> dict:
    """Parse and check a manifest file.

    Returns a dict with ``scheme``, ``tile_size`` and ``sources`` (role ->
    ``(file, region)``); missing scheme and tile size fall back to defaults.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Manifest {path} must contain a JSON object")
    if "sources" not in data:
        raise ValueError(f"Missing 'sources' in {path}")
    if not isinstance(data["sources"], dict):
        raise ValueError(f"'sources' in {path} must be an object keyed by role")

    valid_roles = [r.value for r in SourceRole]
    sources: dict[str, tuple[str, Region | None]] = {}
    for role, entry in data["sources"].items():
        if role not in valid_roles:
            raise ValueError(f"Unknown role '{role}'. Valid: {valid_roles}")
        sources[role] = _parse_source_entry(role, entry)

    return {
        "scheme": data.get("scheme", DEFAULT_SCHEME.value),
        "tile_size": data.get("tile_size", DEFAULT_TILE_SIZE),
        "sources": sources,
    }


def load_sources(
    base_dir: Path,
    entries: dict[str, tuple[str, Region | None]],
) -> SourceSet:
    """Load every manifest entry relative to *base_dir*."""
    images = {
        role: load_source_image(base_dir / file_rel, region)
        for role, (file_rel, region) in entries.items()
    }
    return SourceSet.from_mapping(images)


def load_manifest(
    path: Path,
    scheme: object = None,
    tile_size: int | None = None,
) -> GenerationConfig:
    """Build a ``GenerationConfig`` from a manifest; arguments override it."""
    manifest = parse_manifest(path)
    sources = load_sources(path.parent, manifest["sources"])
    return GenerationConfig(
        sources=sources,
        scheme=manifest["scheme"] if scheme is None else scheme,
        tile_size=manifest["tile_size"] if tile_size is None else tile_size,
    )


def validate_sources(sources: SourceSet) -> list[str]:
    """Return warnings about sources that are fully transparent."""
    warnings: list[str] = []
    for role, image in sources:
        if image is None:
            continue
        if image.mode == "RGBA" and image.getchannel("A").getextrema()[1] == 0:
            warnings.append(f"Source '{role.value}' is fully transparent")
    return warnings
