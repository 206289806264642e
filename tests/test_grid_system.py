"""Tests for grid construction, area parsing and geometry resolution."""

from __future__ import annotations

import math

import pytest

from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.geometry import CanvasSize, GridArea, Margins
from tests.conftest import FULL_HD, STANDARD_SLIDE


def test_create_grid_full_hd(grid, wide_margins):
    g = grid.create_grid(FULL_HD, columns=12, gutter=16, margins=wide_margins)
    assert g.content_width == 1836
    assert g.content_height == 1016
    assert g.column_width == pytest.approx(138.33, abs=0.01)


def test_create_grid_is_deterministic(grid, wide_margins):
    first = grid.create_grid(FULL_HD, columns=12, gutter=16, margins=wide_margins)
    second = grid.create_grid(FULL_HD, columns=12, gutter=16, margins=wide_margins)
    assert first == second


@pytest.mark.parametrize("width,height,columns,gutter,margins", [
    (1920, 1080, 12, 16, Margins(32, 42, 32, 42)),
    (960, 540, 6, 8, Margins.uniform(24)),
    (1280.5, 720.25, 3, 0, Margins(10, 0, 5, 30)),
    (3840, 2160, 24, 32, Margins.uniform(96)),
])
def test_content_box_invariant(grid, width, height, columns, gutter, margins):
    g = grid.create_grid(CanvasSize(width, height), columns=columns, gutter=gutter, margins=margins)
    assert margins.left + g.content_width + margins.right == pytest.approx(width)
    assert margins.top + g.content_height + margins.bottom == pytest.approx(height)
    assert g.column_width * columns + gutter * (columns - 1) == pytest.approx(g.content_width)


@pytest.mark.parametrize("columns", [1, 2, 5, 12, 24, 100])
def test_column_width_positive(grid, columns):
    g = grid.create_grid(FULL_HD, columns=columns, gutter=4, margins=Margins.uniform(10))
    assert g.content_width > 4 * (columns - 1)
    assert g.column_width > 0


@pytest.mark.parametrize("columns", [0, -3])
def test_non_positive_columns_become_one(grid, columns):
    g = grid.create_grid(STANDARD_SLIDE, columns=columns, gutter=16)
    assert g.columns == 1
    assert g.column_width == g.content_width


def test_zero_canvas_yields_zero_geometry(grid):
    g = grid.create_grid(CanvasSize(0, 0), columns=12, gutter=16, margins=Margins.uniform(32))
    for value in (g.content_width, g.content_height, g.column_width):
        assert value == 0
        assert not math.isnan(value)


def test_parse_areas_valid(grid):
    assert grid.parse_areas({"header": "1 / 1 / 2 / 13"}) == {
        "header": GridArea(row_start=1, col_start=1, row_end=2, col_end=13)
    }


@pytest.mark.parametrize("spec", [
    "1 / 1 / 2",
    "1 / 1 / 2 / 3 / 4",
    "1 / a / 2 / 3",
    "1.5 / 1 / 2 / 3",
    "",
    "2 / 1 / 1 / 3",
    "0 / 1 / 1 / 3",
    "1 / 3 / 2 / 3",
])
def test_parse_areas_drops_malformed(grid, spec):
    assert grid.parse_areas({"bad": spec}) == {}


def test_parse_areas_keeps_good_entries_next_to_bad(grid):
    parsed = grid.parse_areas({"a": "1 / 1 / 2 / 7", "bad": "1 / 1 / 2", "b": "1 / 7 / 2 / 13"})
    assert list(parsed) == ["a", "b"]


def test_parse_areas_empty_input(grid):
    assert grid.parse_areas(None) == {}
    assert grid.parse_areas({}) == {}


def test_parse_areas_with_warnings_reports_drops(grid):
    parsed, warnings = grid.parse_areas_with_warnings({"bad": "x"})
    assert parsed == {}
    assert len(warnings) == 1
    assert "bad" in warnings[0]


def test_resolve_column_span():
    from slide_layout.services.grid_system import GridSystem

    one = GridSystem.resolve_column_span(1, 2, 100, 10)
    three = GridSystem.resolve_column_span(3, 6, 100, 10)
    assert (one.x, one.width, one.span_count) == (0, 100, 1)
    assert (three.x, three.width, three.span_count) == (220, 320, 3)


def test_resolve_row_span():
    from slide_layout.services.grid_system import GridSystem

    single = GridSystem.resolve_row_span(1, 2, 600, 6)
    double = GridSystem.resolve_row_span(2, 4, 600, 6)
    assert single.height == 100
    assert (double.y, double.height, double.span_count) == (100, 200, 2)


def test_resolve_span_rejects_empty_span():
    from slide_layout.services.grid_system import GridSystem

    with pytest.raises(InvalidArgumentError):
        GridSystem.resolve_column_span(3, 3, 100, 10)
    with pytest.raises(InvalidArgumentError):
        GridSystem.resolve_row_span(4, 2, 600, 6)


def test_resolve_area_full_width(grid, wide_margins):
    g = grid.create_grid(FULL_HD, columns=12, gutter=16, margins=wide_margins)
    rect = grid.resolve_area(GridArea(1, 1, 2, 13), g, total_rows=1)
    assert rect.x == 42
    assert rect.y == 32
    assert rect.width == pytest.approx(1836)
    assert rect.height == pytest.approx(1016)


def test_resolve_area_uses_gutter_between_rows(grid, wide_margins):
    g = grid.create_grid(FULL_HD, columns=12, gutter=16, margins=wide_margins)
    rect = grid.resolve_area(GridArea(2, 7, 6, 13), g, total_rows=5)
    assert rect.x == pytest.approx(968)
    assert rect.width == pytest.approx(910)
    assert rect.y == pytest.approx(238.4)
    assert rect.height == pytest.approx(809.6)


def test_adjacent_areas_do_not_overlap(grid, wide_margins):
    g = grid.create_grid(FULL_HD, columns=12, gutter=16, margins=wide_margins)
    left = grid.resolve_area(GridArea(1, 1, 2, 7), g, total_rows=2)
    right = grid.resolve_area(GridArea(1, 7, 2, 13), g, total_rows=2)
    below = grid.resolve_area(GridArea(2, 1, 3, 13), g, total_rows=2)
    assert left.x + left.width + 16 == pytest.approx(right.x)
    assert left.y + left.height + 16 == pytest.approx(below.y)


def test_total_rows(grid):
    areas = grid.parse_areas({"a": "1 / 1 / 2 / 13", "b": "2 / 1 / 6 / 7"})
    assert grid.total_rows(areas) == 5
    assert grid.total_rows({}) == 1


def test_validate_grid_config_requires_dimensions(grid):
    result = grid.validate_grid_config({"columns": 12})
    assert not result.valid
    assert "slideDimensions is required" in result.errors


def test_validate_grid_config_large_column_count_is_warning(grid):
    result = grid.validate_grid_config({"slideDimensions": {"width": 960, "height": 540}, "columns": 30})
    assert result.valid
    assert result.warnings == ["Column count should be between 1 and 24"]


def test_validate_grid_config_malformed_area_is_error(grid):
    result = grid.validate_grid_config({
        "slideDimensions": {"width": 960, "height": 540},
        "areas": {"hero": "1 / 1 / 3"},
    })
    assert not result.valid
    assert result.errors[0].startswith("Invalid area definition for hero")


def test_create_grid_from_config_defaults(grid):
    build = grid.create_grid_from_config({
        "slideDimensions": {"width": 960, "height": 540},
        "areas": {"hero": "1 / 1 / 3 / 13", "content": "3 / 1 / 6 / 13"},
    })
    assert build.grid.columns == 12
    assert build.grid.gutter == 16
    assert build.grid.margins == Margins.uniform(32)
    assert build.grid.content_width == 896
    assert build.total_rows == 5
    assert set(build.areas) == {"hero", "content"}


def test_create_grid_from_config_without_dimensions_raises(grid):
    with pytest.raises(InvalidArgumentError):
        grid.create_grid_from_config({"columns": 4})


def test_builtin_templates_parse(grid):
    templates = grid.get_layout_templates()
    assert set(templates) == {"hero-content", "sidebar-main", "three-section", "masonry-grid", "feature-showcase"}
    for name, template in templates.items():
        areas = template.get("areas", {})
        assert len(grid.parse_areas(areas)) == len(areas), name
