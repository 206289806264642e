"""
Layout orchestrator: the single entry point for computing slide geometry.

Takes a LayoutRequest (canvas, content, and a column count, "auto" or a
template) and returns positioned elements with font sizes, line heights and
render styles. Composes the grid system, responsive engine, font solver and
accessibility validator; holds no state between calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
import math
import logging

from slide_layout.config import BreakpointSpec, LayoutConfig, get_config
from slide_layout.exceptions import InvalidArgumentError, UnsupportedLayoutError
from slide_layout.models.geometry import CanvasSize, GridArea, GridDescriptor, Margins, Rect
from slide_layout.models.requests import (
    BreakpointInfo,
    ElementStyle,
    LayoutRequest,
    LayoutResult,
    PositionedElement,
    Theme,
)
from slide_layout.services.accessibility_validator import AccessibilityValidator, is_large_text
from slide_layout.services.font_size_solver import FontSizeSolver
from slide_layout.services.grid_system import GridSystem
from slide_layout.services.layout_templates import LayoutTemplateLibrary
from slide_layout.services.responsive_engine import ResponsiveEngine
from slide_layout.utils.numbers import capped_scale, round_half_up, round_numbers

logger = logging.getLogger(__name__)

HEADER_CONTENT = 'header-content'
PRIMARY_COLOR_AREAS = ('header', 'hero')
SECONDARY_COLOR_AREAS = ('sidebar', 'footer')
CENTERED_AREAS = ('header', 'hero')
BOLD_ROLES = ('title', 'heading')

LAYOUT_TYPES: Dict[str, Dict[str, Any]] = {
    'single-column': {'columns': 1, 'description': 'Single column layout'},
    'double-column': {'columns': 2, 'description': 'Two column layout'},
    'triple-column': {'columns': 3, 'description': 'Three column layout'},
    'quad-grid': {'columns': 2, 'description': 'Two by two grid'},
    'feature-showcase': {'columns': 3, 'description': 'Title with feature highlights'},
    'responsive-grid': {'type': 'responsive', 'description': 'Square-ish grid sized by breakpoint'},
    'advanced-multi-column': {'type': 'generated', 'description': 'Row-major grid from a column count'},
    'custom-grid': {'type': 'template', 'description': 'Template or custom area layout'},
}


def get_layout_info(layout_type: str) -> Dict[str, Any]:
    info = LAYOUT_TYPES.get(layout_type)
    if info is None:
        raise UnsupportedLayoutError(layout_type)
    return {'type': layout_type, **info}


@dataclass
class LayoutPlan:
    """Grid configuration and item-to-area assignment before resolution"""
    grid_config: Dict[str, Any]
    assignments: List[Tuple[Any, str]]
    layout_type: str
    warnings: List[str] = field(default_factory=list)


def calculate_optimal_columns(
    item_count: int,
    columns: Union[int, str],
    canvas_width: float,
    max_columns: int = 6
) -> int:
    """Column count for a generated grid"""
    if isinstance(columns, int):
        return max(1, min(columns, item_count, max_columns))
    if columns != 'auto':
        raise InvalidArgumentError('columns', f"columns must be a positive integer or 'auto', got {columns!r}")

    if item_count <= 1:
        return 1
    if item_count <= 2 or canvas_width < 800:
        return 2
    if item_count <= 4 or canvas_width < 1200:
        return min(3, item_count)
    return min(4, item_count)


def calculate_optimal_rows(item_count: int, columns: int) -> int:
    return max(1, math.ceil(item_count / max(1, columns)))


def generate_grid_areas(item_count: int, columns: int, arrangement: Optional[str] = None) -> Dict[str, str]:
    """
    Row-major areas named content-0..content-N.

    The header-content arrangement reserves a full-width first row named
    "header" and shifts the content areas down by one row.
    """
    row_offset = 0
    areas: Dict[str, str] = {}
    if arrangement == HEADER_CONTENT:
        areas['header'] = GridArea(1, 1, 2, columns + 1).to_spec()
        row_offset = 1
    for index in range(item_count):
        row = index // columns + 1
        col = index % columns + 1
        area = GridArea(row, col, row + 1, col + 1).shifted(rows=row_offset)
        areas[f'content-{index}'] = area.to_spec()
    return areas


class LayoutOrchestrator:
    """Composes the layout services into one request/result call."""

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        grid: Optional[GridSystem] = None,
        responsive: Optional[ResponsiveEngine] = None,
        fonts: Optional[FontSizeSolver] = None,
        accessibility: Optional[AccessibilityValidator] = None,
        templates: Optional[LayoutTemplateLibrary] = None
    ):
        self.config = config or get_config()
        self.grid_system = grid or GridSystem()
        self.responsive_engine = responsive or ResponsiveEngine(self.config, self.grid_system)
        self.font_solver = fonts or FontSizeSolver(self.config)
        self.accessibility = accessibility or AccessibilityValidator(self.config)
        self.templates = templates or LayoutTemplateLibrary()

    # --- spacing ------------------------------------------------------

    def calculate_optimal_gap(self, canvas: CanvasSize) -> int:
        scale = capped_scale(canvas.width, self.config.reference_canvas.width, self.config.max_spacing_scale)
        return round_half_up(self.config.base_gutter * scale)

    def calculate_optimal_margins(self, canvas: CanvasSize) -> Margins:
        scale = capped_scale(canvas.width, self.config.reference_canvas.width, self.config.max_spacing_scale)
        return Margins.uniform(round_half_up(self.config.base_margin * scale))

    # --- entry point --------------------------------------------------

    def create_layout(self, request: Union[LayoutRequest, Mapping[str, Any]]) -> LayoutResult:
        """
        Compute geometry and style for every content item.

        Raises InvalidArgumentError for missing canvas dimensions, unknown
        roles or template names. Malformed areas and colours are recovered
        and reported in ``warnings``.
        """
        if not isinstance(request, LayoutRequest):
            request = LayoutRequest.parse(dict(request))

        canvas = request.canvas
        theme = request.theme or Theme()
        classification = self.responsive_engine.classify_canvas(canvas.width, canvas.height)
        breakpoint = classification.breakpoint
        warnings: List[str] = []

        items: Sequence[Any] = list(request.content)
        if request.responsive:
            items = self.responsive_engine.optimize_content(items, breakpoint)

        if request.template is not None:
            plan = self._plan_template_layout(request, items, breakpoint)
        else:
            plan = self._plan_generated_layout(request, items, breakpoint)
        warnings.extend(plan.warnings)

        build = self.grid_system.create_grid_from_config(plan.grid_config)
        warnings.extend(warning for warning in build.warnings if warning not in warnings)
        self._check_area_bounds(build.areas, build.grid, warnings)

        elements = []
        for item, area_name in plan.assignments:
            area = build.areas.get(area_name)
            if area is None:
                warnings.append(f"Area {area_name!r} is not defined; item skipped")
                continue
            rect = self.grid_system.resolve_area(area, build.grid, build.total_rows)
            elements.append(self._position_item(item, area_name, rect, canvas, request, theme, warnings))

        logger.info(
            f"Laid out {len(elements)} element(s) on {canvas.width:g}x{canvas.height:g} "
            f"({breakpoint.key}, {plan.layout_type}, {build.grid.columns} columns)"
        )

        return LayoutResult(
            positioned_elements=elements,
            grid=build.grid,
            breakpoint=BreakpointInfo(
                key=breakpoint.key,
                name=breakpoint.name,
                columns=breakpoint.columns,
                aspect_ratio=round(classification.aspect_ratio, 4),
            ) if request.responsive else None,
            layout_type=plan.layout_type,
            areas={name: area.to_spec() for name, area in build.areas.items()},
            warnings=warnings,
        )

    # --- planning -----------------------------------------------------

    def _plan_generated_layout(self, request: LayoutRequest, items: Sequence[Any],
                               breakpoint: BreakpointSpec) -> LayoutPlan:
        canvas = request.canvas
        header_item = None
        body_items = list(items)
        if request.arrangement == HEADER_CONTENT and body_items:
            header_item, body_items = body_items[0], body_items[1:]

        columns = calculate_optimal_columns(
            len(body_items), request.columns, canvas.width, self.config.max_columns
        )
        layout_type = 'advanced-multi-column'
        if request.responsive:
            layout_type = self.responsive_engine.get_optimal_layout_type(len(items), breakpoint)
            if layout_type == 'responsive-grid' and request.columns == 'auto':
                columns = min(breakpoint.columns, math.ceil(math.sqrt(len(body_items))))

        margins = self.calculate_optimal_margins(canvas)
        base_config = {
            'slideDimensions': canvas,
            'columns': columns,
            'areas': generate_grid_areas(len(body_items), columns, request.arrangement),
            'gap': self.calculate_optimal_gap(canvas),
            'margins': {'top': margins.top, 'right': margins.right, 'bottom': margins.bottom, 'left': margins.left},
        }
        grid_config = self._adapt(base_config, request, breakpoint)

        assignments = [(item, f'content-{index}') for index, item in enumerate(body_items)]
        if header_item is not None:
            assignments.insert(0, (header_item, 'header'))
        return LayoutPlan(grid_config=grid_config, assignments=assignments, layout_type=layout_type)

    def _plan_template_layout(self, request: LayoutRequest, items: Sequence[Any],
                              breakpoint: BreakpointSpec) -> LayoutPlan:
        warnings: List[str] = []
        overrides_applied = False
        if isinstance(request.template, str):
            template = self.templates.get_template(request.template)
            areas = dict(template.areas)
            layout_type = template.id
            if request.responsive and breakpoint.key in template.responsive:
                areas = template.areas_for(breakpoint.key)
                overrides_applied = True
        else:
            areas = dict(request.template)
            layout_type = 'custom-grid'

        valid_areas, area_warnings = self.grid_system.parse_areas_with_warnings(areas)
        warnings.extend(area_warnings)
        base_config = {
            'slideDimensions': request.canvas,
            'columns': self.config.template_columns,
            'areas': areas,
            'gap': self.config.base_gutter,
        }

        if overrides_applied:
            # Breakpoint-specific areas already target a narrow grid
            grid_config = dict(base_config)
            grid_config['columns'] = max((area.col_end - 1 for area in valid_areas.values()), default=1)
        else:
            grid_config = self._adapt(base_config, request, breakpoint)

        assignments = self._assign_items_to_areas(items, list(valid_areas.keys()), warnings)
        return LayoutPlan(grid_config=grid_config, assignments=assignments, layout_type=layout_type,
                          warnings=warnings)

    def _adapt(self, base_config: Dict[str, Any], request: LayoutRequest,
               breakpoint: BreakpointSpec) -> Dict[str, Any]:
        if not request.responsive:
            return base_config
        return self.responsive_engine.adapt_config_to_breakpoint(base_config, breakpoint)

    @staticmethod
    def _assign_items_to_areas(items: Sequence[Any], area_names: List[str],
                               warnings: List[str]) -> List[Tuple[Any, str]]:
        """Explicit item.area wins; remaining items fill free areas in order"""
        assignments: List[Tuple[Any, str]] = []
        taken = set()
        pending = []

        for item in items:
            if item.area is not None:
                if item.area in area_names and item.area not in taken:
                    assignments.append((item, item.area))
                    taken.add(item.area)
                    continue
                warnings.append(f"Requested area {item.area!r} is unavailable; placing item in next free area")
            pending.append(item)

        free = [name for name in area_names if name not in taken]
        for item, name in zip(pending, free):
            assignments.append((item, name))
        if len(pending) > len(free):
            warnings.append(f"{len(pending) - len(free)} item(s) had no free area and were not placed")

        order = {name: index for index, name in enumerate(area_names)}
        assignments.sort(key=lambda pair: order[pair[1]])
        return assignments

    @staticmethod
    def _check_area_bounds(areas: Mapping[str, GridArea], grid: GridDescriptor, warnings: List[str]) -> None:
        for name, area in areas.items():
            if area.col_end - 1 > grid.columns:
                warnings.append(f"Area {name!r} extends past column {grid.columns}")

    # --- per element --------------------------------------------------

    def _position_item(self, item: Any, area_name: str, rect: Rect, canvas: CanvasSize,
                       request: LayoutRequest, theme: Theme, warnings: List[str]) -> PositionedElement:
        role = item.role
        band = self.font_solver.band_for(role)

        if item.font_size is not None:
            font_size = item.font_size
            line_height = self.font_solver.line_height(font_size, role)
        else:
            sizing = self.font_solver.solve(
                base_size=band.default,
                canvas=canvas,
                content_length=len(item.plain_text),
                viewing_distance=request.viewing_distance,
                importance=item.importance,
                role=role,
            )
            font_size, line_height = sizing.font_size, sizing.line_height

        bold = role in BOLD_ROLES
        color = self._area_color(area_name, theme)
        report = self.accessibility.validate(
            color, theme.background, large_text=is_large_text(font_size, bold)
        )
        warnings.extend(report.warnings)
        if not report.passes:
            replacement = self.accessibility.find_accessible_text_color(
                theme.background, large_text=is_large_text(font_size, bold)
            )
            warnings.append(
                f"Text colour {color} on {theme.background} fails {report.level} "
                f"(ratio {report.ratio}); using {replacement} for {area_name}"
            )
            color = replacement

        check = self.font_solver.validate_element_accessibility(role, font_size, line_height)
        warnings.extend(f"{area_name}: {issue}" for issue in check.issues)

        logger.debug(f"{area_name}: {role} at {rect} size={font_size} leading={line_height}")

        return PositionedElement(
            item=item,
            position=Rect(**round_numbers(rect.to_dict())),
            font_size=font_size,
            line_height=line_height,
            area=area_name,
            style=ElementStyle(
                font_size=font_size,
                line_height=line_height,
                bold=bold,
                color=color,
                alignment='center' if role == 'title' or area_name in CENTERED_AREAS else 'left',
            ),
        )

    @staticmethod
    def _area_color(area_name: Optional[str], theme: Theme) -> str:
        if area_name in PRIMARY_COLOR_AREAS:
            return theme.primary
        if area_name in SECONDARY_COLOR_AREAS:
            return theme.text_secondary
        return theme.text_primary


def create_layout(request: Union[LayoutRequest, Mapping[str, Any]],
                  config: Optional[LayoutConfig] = None) -> LayoutResult:
    """Compute a layout with a fresh orchestrator for the given configuration"""
    return LayoutOrchestrator(config).create_layout(request)
