"""Tests for the template catalogue."""

from __future__ import annotations

import pytest

from slide_layout.exceptions import InvalidArgumentError, TemplateNotFoundError


def test_catalogue_size(templates):
    assert len(templates.templates) == 15


def test_get_template(templates):
    quad = templates.get_template("quad-grid")
    assert quad.category == "grid"
    assert list(quad.areas) == ["topLeft", "topRight", "bottomLeft", "bottomRight"]


def test_unknown_template_raises(templates):
    with pytest.raises(TemplateNotFoundError) as excinfo:
        templates.get_template("does-not-exist")
    assert isinstance(excinfo.value, InvalidArgumentError)
    assert str(excinfo.value).startswith("Template not found: does-not-exist")


def test_every_template_is_valid(templates):
    for template in templates.templates.values():
        result = templates.validate_template(template.to_dict())
        assert result["valid"], (template.id, result["errors"])
        assert result["warnings"] == [], template.id


def test_every_template_role_has_a_font_band(templates, config):
    for template in templates.templates.values():
        assert set(template.default_content) <= set(config.roles), template.id


def test_responsive_overrides_are_single_column(templates, grid):
    for template in templates.templates.values():
        for key in ("xs", "sm"):
            if key not in template.responsive:
                continue
            areas = grid.parse_areas(template.areas_for(key))
            assert max(area.col_end for area in areas.values()) == 2, (template.id, key)


def test_categories(templates):
    categories = {category["id"]: category for category in templates.get_categories()}
    assert list(categories) == ["basic", "header", "sidebar", "grid", "dashboard", "presentation", "content"]
    assert categories["basic"] == {"id": "basic", "name": "Basic", "count": 3}


def test_search_by_keyword(templates):
    found = {template.id for template in templates.search_templates(keyword="sidebar")}
    assert found == {"sidebar-main", "right-sidebar"}


def test_search_by_content_and_responsive(templates):
    found = templates.search_templates(content="footnote")
    assert [template.id for template in found] == ["magazine-layout"]
    assert all(template.responsive for template in templates.search_templates(responsive=True))


def test_create_layout_config_for_breakpoint(templates):
    config = templates.create_layout_config("double-column", breakpoint_key="xs")
    assert config["areas"] == {"left": "1 / 1 / 3 / 2", "right": "3 / 1 / 6 / 2"}
    assert config["layout_type"] == "custom-grid"
    assert [entry["area"] for entry in config["content"]] == ["left", "right"]


def test_create_layout_config_with_custom_areas(templates):
    config = templates.create_layout_config("title-content", custom_areas={"content": "2 / 2 / 6 / 12"})
    assert config["areas"]["content"] == "2 / 2 / 6 / 12"


def test_map_content_to_areas_leaves_spare_areas_empty(templates):
    mapped = templates.map_content_to_areas(["only"], {"a": "1 / 1 / 2 / 2", "b": "2 / 1 / 3 / 2"})
    assert mapped == [
        {"item": "only", "area": "a", "grid_area": "1 / 1 / 2 / 2"},
        {"item": None, "area": "b", "grid_area": "2 / 1 / 3 / 2"},
    ]


def test_validate_template_reports_problems(templates):
    result = templates.validate_template({
        "name": "",
        "areas": {"main": "1 / 1 / 2"},
        "responsive": {"xs": {"aside": "1 / 1 / 2 / 2"}},
    })
    assert not result["valid"]
    assert "Template name is required" in result["errors"]
    assert "Invalid area definition for main: 1 / 1 / 2" in result["errors"]
    assert result["warnings"] == ["Responsive area aside not found in base template"]


def test_generate_preview(templates):
    preview = templates.generate_preview("header-two-column")
    assert [entry["area"] for entry in preview["content"]] == ["header", "left", "right"]
    assert preview["content"][0]["text"] == "Header Section"
    assert preview["content"][1]["type"] == "body"


def test_recommendations(templates):
    assert templates.get_recommendations(2, ["title"]) == [
        "double-column", "comparison-layout", "title-content", "hero-content"
    ]
    assert templates.get_recommendations(2, ["title"], screen_size="mobile") == ["double-column", "title-content"]
    assert templates.get_recommendations(1) == ["single-column", "article-layout"]


def test_template_tables_are_read_only(templates):
    double = templates.get_template("double-column")
    with pytest.raises(TypeError):
        double.areas["left"] = "1 / 1 / 2 / 2"
    with pytest.raises(TypeError):
        double.responsive["xs"]["left"] = "1 / 1 / 2 / 2"

    config = templates.create_layout_config("double-column", breakpoint_key="xs")
    config["areas"]["left"] = "9 / 9 / 10 / 10"
    assert double.areas_for("sm")["left"] == "1 / 1 / 3 / 2"
