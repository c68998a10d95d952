"""Tests for tile composition and sheet packing."""

import pytest
from PIL import Image

from autotile.assets import AssetId, AssetLibrary, SourceSet, build_asset_library
from autotile.config import GenerationConfig
from autotile.errors import InvalidTileSizeError, MalformedAssetError
from autotile.masks import NeighborMask, Scheme, enumerate_masks
from autotile.sheet import (
    cell_origin,
    compose_sheet,
    compose_tile,
    generate_sheet,
    sheet_dimensions,
    verify_sheet,
)

from .helpers import CLEAR, EDGE_LEFT, EDGE_TOP, FILL, INNER, OUTER

TS = 64
H = TS // 2
TL_BOX = (0, 0, H, H)
TR_BOX = (H, 0, TS, H)
BL_BOX = (0, H, H, TS)
BR_BOX = (H, H, TS, TS)


@pytest.fixture
def library(full_sources):
    return build_asset_library(full_sources, TS)


class TestLayout:
    """Sheet dimensions and cell placement"""

    def test_basic4_dimensions(self, library):
        sheet = compose_sheet(enumerate_masks(Scheme.BASIC4), library, TS, 4)
        assert sheet.size == (256, 256)

    def test_blob8_dimensions(self, library):
        sheet = compose_sheet(enumerate_masks(Scheme.BLOB8), library, TS, 8)
        assert sheet.size == (512, 384)

    def test_trailing_cell_left_transparent(self, library, colors_in):
        sheet = compose_sheet(enumerate_masks(Scheme.BLOB8), library, TS, 8)
        x, y = cell_origin(47, TS, 8)
        assert (x, y) == (7 * TS, 5 * TS)
        assert colors_in(sheet, (x, y, x + TS, y + TS)) == {CLEAR}

    def test_sheet_dimensions_rounds_rows_up(self):
        assert sheet_dimensions(47, 16, 8) == (128, 96)
        assert sheet_dimensions(16, 16, 4) == (64, 64)
        assert sheet_dimensions(1, 10, 3) == (30, 10)

    def test_invalid_columns(self, library):
        with pytest.raises(ValueError):
            compose_sheet(enumerate_masks(Scheme.BASIC4), library, TS, 0)

    def test_invalid_tile_size(self, library):
        with pytest.raises(InvalidTileSizeError):
            compose_sheet(enumerate_masks(Scheme.BASIC4), library, -1, 4)


class TestComposeTile:
    """Quadrant composition of single tiles"""

    def test_isolated_uses_outer_corners(self, library, colors_in):
        tile = compose_tile(NeighborMask(), library, TS)
        for box in (TL_BOX, TR_BOX, BL_BOX, BR_BOX):
            assert colors_in(tile, box) == {OUTER}

    def test_isolated_samples_each_rotated_corner(self, marked, colors_in):
        red, green, blue, white = (
            (255, 0, 0, 255),
            (0, 255, 0, 255),
            (0, 0, 255, 255),
            (255, 255, 255, 255),
        )
        # corner piece lives in the top-left; rotations carry it to each quadrant
        sources = SourceSet(outer_corner=marked(8, red, green, blue, white))
        library = build_asset_library(sources, TS)
        tile = compose_tile(NeighborMask(), library, TS)
        for box in (TL_BOX, TR_BOX, BL_BOX, BR_BOX):
            assert colors_in(tile, box) == {red}

    def test_full_mask_is_fill(self, library, colors_in):
        tile = compose_tile(NeighborMask(*([True] * 8)), library, TS)
        assert colors_in(tile, (0, 0, TS, TS)) == {FILL}

    def test_orthogonals_without_diagonals_are_inner(self, library, colors_in):
        tile = compose_tile(NeighborMask(n=True, e=True, s=True, w=True), library, TS)
        assert colors_in(tile, (0, 0, TS, TS)) == {INNER}

    def test_north_only(self, library, colors_in):
        tile = compose_tile(NeighborMask(n=True), library, TS)
        assert colors_in(tile, (0, 0, TS, H)) == {EDGE_LEFT}
        assert colors_in(tile, (0, H, TS, TS)) == {OUTER}

    def test_east_west_corridor(self, library, colors_in):
        tile = compose_tile(NeighborMask(e=True, w=True), library, TS)
        assert colors_in(tile, (0, 0, TS, TS)) == {EDGE_TOP}

    def test_fill_shows_through_transparent_part(self, marked, solid, colors_in):
        # outer corner with a see-through top-left quadrant
        sources = SourceSet(
            outer_corner=marked(8, CLEAR, OUTER, OUTER, OUTER),
            fill=solid(FILL),
        )
        library = build_asset_library(sources, TS)
        tile = compose_tile(NeighborMask(), library, TS)
        assert colors_in(tile, TL_BOX) == {FILL}
        assert colors_in(tile, BR_BOX) == {FILL}

    def test_translucent_piece_over_opaque_fill_stays_opaque(self, solid):
        sources = SourceSet(
            outer_corner=solid((0, 0, 255, 128)),
            fill=solid((255, 0, 0, 255)),
        )
        library = build_asset_library(sources, TS)
        tile = compose_tile(NeighborMask(), library, TS)
        r, g, b, a = tile.getpixel((0, 0))
        assert a == 255
        assert g == 0
        assert 120 <= r <= 135 and 120 <= b <= 135

    def test_translucent_piece_over_missing_fill_keeps_its_alpha(self, solid):
        sources = SourceSet(outer_corner=solid((0, 0, 255, 128)))
        library = build_asset_library(sources, TS)
        tile = compose_tile(NeighborMask(), library, TS)
        r, g, b, a = tile.getpixel((TS - 1, TS - 1))
        assert a == 128
        assert (r, g) == (0, 0) and b >= 250

    def test_missing_fill_leaves_gaps(self, sources_without_fill, colors_in):
        library = build_asset_library(sources_without_fill, TS)
        assert colors_in(compose_tile(NeighborMask(), library, TS), (0, 0, TS, TS)) == {OUTER}
        full = compose_tile(NeighborMask(*([True] * 8)), library, TS)
        assert colors_in(full, (0, 0, TS, TS)) == {CLEAR}

    def test_odd_tile_size_has_no_holes(self, full_sources, colors_in):
        library = build_asset_library(full_sources, 5)
        tile = compose_tile(NeighborMask(n=True), library, 5)
        assert CLEAR not in colors_in(tile, (0, 0, 5, 5))

    def test_wrong_sized_asset(self, solid):
        images = {asset_id: solid(FILL, (TS, TS)) for asset_id in AssetId}
        images[AssetId.EDGE_T] = solid(EDGE_TOP, (TS // 2, TS // 2))
        library = AssetLibrary(images, TS)
        with pytest.raises(MalformedAssetError):
            compose_tile(NeighborMask(), library, TS)


class TestComposeSheet:
    """Packing order and determinism"""

    @pytest.mark.parametrize("scheme,columns", [(Scheme.BASIC4, 4), (Scheme.BLOB8, 8)])
    def test_cells_follow_mask_order(self, marked, scheme, columns):
        red, green, blue, white = (
            (255, 0, 0, 255),
            (0, 255, 0, 255),
            (0, 0, 255, 255),
            (255, 255, 255, 255),
        )
        sources = SourceSet(
            outer_corner=marked(8, red, green, blue, white),
            inner_corner=marked(8, blue, red, white, green),
            edge_left=marked(8, green, white, red, blue),
            edge_top=marked(8, white, blue, green, red),
            fill=marked(8, red, white, green, blue),
        )
        ts = 16
        library = build_asset_library(sources, ts)
        masks = enumerate_masks(scheme)
        sheet = compose_sheet(masks, library, ts, columns)
        for idx, mask in enumerate(masks):
            x, y = cell_origin(idx, ts, columns)
            cell = sheet.crop((x, y, x + ts, y + ts))
            assert cell.tobytes() == compose_tile(mask, library, ts).tobytes()

    def test_deterministic(self, full_sources):
        config = GenerationConfig(sources=full_sources, scheme=Scheme.BLOB8, tile_size=32)
        assert generate_sheet(config).tobytes() == generate_sheet(config).tobytes()

    def test_generate_sheet(self, full_sources, colors_in):
        config = GenerationConfig(sources=full_sources, scheme="16", tile_size=16)
        sheet = generate_sheet(config)
        assert sheet.size == (64, 64)
        # index 0: no orthogonal neighbors
        assert colors_in(sheet, (0, 0, 16, 16)) == {OUTER}
        # index 15: all neighbors
        assert colors_in(sheet, (48, 48, 64, 64)) == {FILL}

    def test_basic4_with_missing_fill_renders(self, sources_without_fill):
        config = GenerationConfig(sources=sources_without_fill, scheme=Scheme.BASIC4, tile_size=16)
        sheet = generate_sheet(config)
        assert sheet.size == (64, 64)
        assert sheet.getpixel((56, 56)) == CLEAR


class TestVerifySheet:
    """Warnings for blank tiles"""

    def test_complete_library_has_no_warnings(self, library):
        masks = enumerate_masks(Scheme.BLOB8)
        sheet = compose_sheet(masks, library, TS, 8)
        assert verify_sheet(sheet, masks, TS, 8) == []

    def test_reports_blank_tiles(self, sources_without_fill):
        library = build_asset_library(sources_without_fill, 16)
        masks = enumerate_masks(Scheme.BLOB8)
        sheet = compose_sheet(masks, library, 16, 8)
        warnings = verify_sheet(sheet, masks, 16, 8)
        assert len(warnings) == 1
        assert warnings[0].startswith("1 of 47 tiles")
        assert "[46]" in warnings[0]

    def test_blank_image(self):
        masks = enumerate_masks(Scheme.BASIC4)
        sheet = Image.new("RGBA", (32, 32), CLEAR)
        assert verify_sheet(sheet, masks, 8, 4)[0].startswith("16 of 16")
