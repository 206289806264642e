"""Tests for breakpoint classification, scaling, reflow and content optimization."""

from __future__ import annotations

import math

import pytest

from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.content import TableContent, TextContent
from slide_layout.models.geometry import CanvasSize, GridArea
from slide_layout.services.responsive_engine import summarize_text, table_to_list
from tests.conftest import FULL_HD, LONG_TEXT, STANDARD_SLIDE


# --- classification ---------------------------------------------------

@pytest.mark.parametrize("width,expected", [
    (-50, "xs"),
    (0, "xs"),
    (480, "xs"),
    (480.5, "sm"),
    (481, "sm"),
    (768, "sm"),
    (769, "md"),
    (1024, "md"),
    (1025, "lg"),
    (1440, "lg"),
    (1440.5, "xl"),
    (1441, "xl"),
    (7680, "xl"),
])
def test_classify_width_buckets(engine, width, expected):
    assert engine.classify(width, 800).key == expected


def test_classification_is_total_and_ordered(engine):
    order = [spec.key for spec in engine.config.breakpoint_thresholds]
    previous_index = 0
    width = 0.0
    while width < 3000:
        key = engine.classify(width, 1000).key
        index = order.index(key)
        assert index >= previous_index
        previous_index = index
        width += 3.7


@pytest.mark.parametrize("height", [1, 100, 1080, 10000])
def test_classification_ignores_height(engine, height):
    assert engine.classify(1000, height).key == "md"


def test_classify_canvas_reports_aspect_ratio(engine):
    result = engine.classify_canvas(1920, 1080)
    assert result.key == "xl"
    assert result.aspect_ratio == pytest.approx(16 / 9)


@pytest.mark.parametrize("width", [math.nan, math.inf, -math.inf, None])
def test_classify_rejects_non_finite_width(engine, width):
    with pytest.raises(InvalidArgumentError):
        engine.classify(width, 100)


def test_unknown_breakpoint_falls_back_with_warning(engine):
    warnings: list[str] = []
    spec = engine.get_breakpoint("xxl", warnings)
    assert spec.key == "md"
    assert len(warnings) == 1
    assert "xxl" in warnings[0]


# --- scaling ----------------------------------------------------------

def test_scaling_factors_at_reference(engine, config):
    factors = engine.scaling_factors(FULL_HD, config.get_breakpoint("xl"))
    assert factors.uniform == 1.0
    assert factors.font_size == pytest.approx(1.1)
    assert factors.content_density == pytest.approx(1.3)


def test_scaling_factors_half_size(engine, config):
    factors = engine.scaling_factors(STANDARD_SLIDE, config.get_breakpoint("md"))
    assert factors.uniform == pytest.approx(0.5)
    assert factors.font_size == pytest.approx(0.45)
    assert factors.spacing == pytest.approx(0.5)
    assert factors.content_density == pytest.approx(1.0)


def test_scaling_uses_smaller_axis(engine, config):
    factors = engine.scaling_factors(CanvasSize(3840, 1080), config.get_breakpoint("xl"))
    assert factors.uniform == 1.0


def test_content_scaling(engine, config):
    wide = engine.calculate_content_scaling(CanvasSize(2560, 1080), config.get_breakpoint("xl"))
    square = engine.calculate_content_scaling(CanvasSize(400, 400), config.get_breakpoint("xs"))
    assert (wide.density, wide.aspect) == (1.2, 1.1)
    assert (square.density, square.aspect) == (0.8, 0.9)
    assert square.combined == pytest.approx(0.72)


def test_scale_spacing_nested(engine):
    scaled = engine.scale_spacing({"top": 32, "left": 40, "nested": {"gap": 10}, "label": "x"}, 0.8)
    assert scaled == {"top": 26, "left": 32, "nested": {"gap": 8}, "label": "x"}


# --- reflow -----------------------------------------------------------

def test_redistribute_to_single_column(engine):
    areas = {"header": "1 / 1 / 2 / 13", "left": "2 / 1 / 6 / 7", "right": "2 / 7 / 6 / 13"}
    result = engine.redistribute_areas(areas, 1)
    assert result == {
        "header": GridArea(1, 1, 2, 2),
        "left": GridArea(2, 1, 3, 2),
        "right": GridArea(3, 1, 4, 2),
    }


def test_redistribute_to_two_columns_preserves_reading_order(engine):
    names = [f"area{i}" for i in range(7)]
    areas = {name: f"1 / {i + 1} / 2 / {i + 2}" for i, name in enumerate(names)}
    result = engine.redistribute_areas(areas, 2)

    assert result["area0"] == GridArea(1, 1, 2, 2)
    assert result["area1"] == GridArea(1, 2, 2, 3)
    assert result["area2"] == GridArea(2, 1, 3, 2)
    reading_order = sorted(result, key=lambda name: (result[name].row_start, result[name].col_start))
    assert reading_order == names


def test_redistribute_three_columns_keeps_areas(engine, grid):
    areas = {"a": "1 / 1 / 2 / 5", "b": "1 / 5 / 2 / 13"}
    assert engine.redistribute_areas(areas, 3) == grid.parse_areas(areas)


def test_redistribute_drops_malformed(engine):
    result = engine.redistribute_areas({"a": "1 / 1 / 2 / 7", "bad": "nope", "b": "1 / 7 / 2 / 13"}, 1)
    assert list(result) == ["a", "b"]
    assert result["b"] == GridArea(2, 1, 3, 2)


def test_adapt_config_shrinks_to_single_column(engine, config):
    base = {
        "columns": 12,
        "areas": {"header": "1 / 1 / 2 / 13", "left": "2 / 1 / 6 / 7", "right": "2 / 7 / 6 / 13"},
        "gap": 16,
        "margins": {"top": 32, "right": 32, "bottom": 32, "left": 32},
    }
    adapted = engine.adapt_config_to_breakpoint(base, config.get_breakpoint("xs"))
    assert adapted["columns"] == 1
    assert adapted["areas"] == {"header": "1 / 1 / 2 / 2", "left": "2 / 1 / 3 / 2", "right": "3 / 1 / 4 / 2"}
    assert adapted["gap"] == 13
    assert adapted["margins"]["top"] == 26
    assert base["columns"] == 12


def test_adapt_config_keeps_areas_on_wide_canvas(engine, config):
    base = {"columns": 12, "areas": {"a": "1 / 1 / 2 / 7", "b": "1 / 7 / 2 / 13"}, "gap": 16}
    adapted = engine.adapt_config_to_breakpoint(base, config.get_breakpoint("lg"))
    assert adapted["columns"] == 12
    assert adapted["areas"] == base["areas"]
    assert adapted["gap"] == 16


def test_adapt_config_without_areas_uses_breakpoint_columns(engine, config):
    adapted = engine.adapt_config_to_breakpoint({"columns": 6}, config.get_breakpoint("md"))
    assert adapted["columns"] == 2


# --- content optimization --------------------------------------------

def test_summarize_text_cuts_at_word_boundary():
    assert summarize_text(LONG_TEXT) == ("word " * 30).rstrip() + "..."


def test_summarize_text_without_spaces():
    assert summarize_text("x" * 200) == "x" * 150 + "..."


def test_summarize_text_short_text_unchanged():
    assert summarize_text("short") == "short"


def test_optimize_content_truncates_long_text(engine, config):
    [item] = engine.optimize_content([TextContent(type="body", text=LONG_TEXT)], config.get_breakpoint("xs"))
    assert item.truncated
    assert item.mobile_optimized
    assert item.text.endswith("...")
    assert len(item.text) <= 153


def test_optimize_content_boosts_font_size(engine, config):
    sm = config.get_breakpoint("sm")
    small, large = engine.optimize_content(
        [TextContent(type="body", text="a", font_size=10), TextContent(type="body", text="b", font_size=20)], sm
    )
    assert small.font_size == 18
    assert large.font_size == pytest.approx(24)
    assert not small.truncated


def test_optimize_content_converts_tables(engine, config):
    table = TableContent(type="table", data=[["Name", "Value"], ["a", 1], ["b", 2]])
    [item] = engine.optimize_content([table], config.get_breakpoint("xs"))
    assert isinstance(item, TextContent)
    assert item.type == "body"
    assert item.text == "Header: Name, Value\n• a: 1\n• b: 2"


def test_table_to_list_empty_table_uses_text():
    assert table_to_list(TableContent(type="table", text="fallback")) == "fallback"


def test_optimize_content_is_idempotent(engine, config):
    xs = config.get_breakpoint("xs")
    items = [
        TextContent(type="title", text="Quarterly review", font_size=30),
        TextContent(type="body", text=LONG_TEXT),
        TableContent(type="table", data=[["h1", "h2"], ["x", "y"]]),
    ]
    once = engine.optimize_content(items, xs)
    assert engine.optimize_content(once, xs) == once


def test_optimize_content_leaves_input_untouched(engine, config):
    items = [TextContent(type="body", text=LONG_TEXT, font_size=12)]
    engine.optimize_content(items, config.get_breakpoint("xs"))
    assert items[0].text == LONG_TEXT
    assert items[0].font_size == 12
    assert not items[0].mobile_optimized


def test_optimize_content_skips_wide_breakpoints(engine, config):
    items = [TextContent(type="body", text=LONG_TEXT)]
    assert engine.optimize_content(items, config.get_breakpoint("md")) == items


# --- layout selection and rules --------------------------------------

@pytest.mark.parametrize("count,key,expected", [
    (1, "xl", "single-column"),
    (5, "xs", "single-column"),
    (5, "sm", "single-column"),
    (2, "md", "double-column"),
    (4, "md", "quad-grid"),
    (5, "md", "responsive-grid"),
    (2, "lg", "double-column"),
    (3, "lg", "triple-column"),
    (4, "xl", "quad-grid"),
    (6, "xl", "feature-showcase"),
    (7, "xl", "responsive-grid"),
])
def test_optimal_layout_type(engine, config, count, key, expected):
    assert engine.get_optimal_layout_type(count, config.get_breakpoint(key)) == expected


def test_breakpoint_rules(engine):
    rules = engine.generate_breakpoint_rules()
    assert rules["xs"]["condition"] == "max-width: 480px"
    assert rules["xl"]["condition"] == "min-width: 1441px"
    assert rules["xs"]["rules"]["layout"] == "single-column"
    assert rules["md"]["rules"]["layout"] == "double-column"
    assert rules["lg"]["rules"]["fontSize"] == "1em"


def test_transition_thresholds(engine):
    assert engine.get_transition_thresholds() == [
        ("xs", "sm", 480),
        ("sm", "md", 768),
        ("md", "lg", 1024),
        ("lg", "xl", 1440),
    ]


def test_performance_optimized_config(engine):
    assert engine.get_performance_optimized_config({"animations": True}, 10) == {"animations": True}
    busy = engine.get_performance_optimized_config({"animations": True}, 30)
    assert busy["animations"] is False
    assert "lazy_loading" not in busy
    huge = engine.get_performance_optimized_config({}, 60)
    assert huge["lazy_loading"] and huge["virtual_scrolling"]


def test_validate_responsive_config(engine, config):
    assert engine.validate_responsive_config().valid

    specs = list(config.breakpoint_thresholds)
    broken = engine.validate_responsive_config([specs[1], specs[0], specs[4]])
    assert not broken.valid

    closed = engine.validate_responsive_config(specs[:4])
    assert not closed.valid
    assert any("open-ended" in error for error in closed.errors)
