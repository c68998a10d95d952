"""Shared fixtures: solid and quadrant-marked source images."""

import pytest

from autotile.assets import SourceSet

from .helpers import (
    EDGE_LEFT,
    EDGE_TOP,
    FILL,
    INNER,
    OUTER,
    marked_image,
    region_colors,
    solid_image,
)


@pytest.fixture
def solid():
    return solid_image


@pytest.fixture
def marked():
    return marked_image


@pytest.fixture
def colors_in():
    return region_colors


@pytest.fixture
def full_sources():
    """One solid colour per role."""
    return SourceSet(
        outer_corner=solid_image(OUTER),
        inner_corner=solid_image(INNER),
        edge_left=solid_image(EDGE_LEFT),
        edge_top=solid_image(EDGE_TOP),
        fill=solid_image(FILL),
    )


@pytest.fixture
def sources_without_fill():
    return SourceSet(
        outer_corner=solid_image(OUTER),
        inner_corner=solid_image(INNER),
        edge_left=solid_image(EDGE_LEFT),
        edge_top=solid_image(EDGE_TOP),
    )
