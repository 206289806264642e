"""Shared fixtures for layout engine tests."""

from __future__ import annotations

import pytest

from slide_layout.config import get_config
from slide_layout.models.geometry import CanvasSize, Margins
from slide_layout.services.accessibility_validator import AccessibilityValidator
from slide_layout.services.font_size_solver import FontSizeSolver
from slide_layout.services.grid_system import GridSystem
from slide_layout.services.layout_orchestrator import LayoutOrchestrator
from slide_layout.services.layout_templates import LayoutTemplateLibrary
from slide_layout.services.responsive_engine import ResponsiveEngine


FULL_HD = CanvasSize(1920, 1080)
STANDARD_SLIDE = CanvasSize(960, 540)
PHONE = CanvasSize(400, 300)

LONG_TEXT = "word " * 40


@pytest.fixture
def config():
    return get_config()


@pytest.fixture
def grid():
    return GridSystem()


@pytest.fixture
def engine(config, grid):
    return ResponsiveEngine(config, grid)


@pytest.fixture
def solver(config):
    return FontSizeSolver(config)


@pytest.fixture
def validator(config):
    return AccessibilityValidator(config)


@pytest.fixture
def templates():
    return LayoutTemplateLibrary()


@pytest.fixture
def orchestrator(config):
    return LayoutOrchestrator(config)


@pytest.fixture
def wide_margins():
    return Margins(top=32, right=42, bottom=32, left=42)


def body_items(count: int) -> list[dict]:
    return [{"type": "body", "text": f"Point {i + 1}"} for i in range(count)]
