"""
Responsive engine: breakpoint classification, scaling and area reflow.

A canvas is classified into one of five width buckets (xs..xl). Each bucket
carries multipliers for typography, spacing and margins plus a density
category, and a column count that may force multi-column area maps to be
re-flowed into one or two vertical sequences.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
import math
import logging

from slide_layout.config import BreakpointSpec, LayoutConfig, get_config
from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.content import TableContent, TextContent
from slide_layout.models.geometry import CanvasSize, GridArea
from slide_layout.services.grid_system import AreaSpec, GridSystem, grid_system
from slide_layout.utils.numbers import scale_ratio

logger = logging.getLogger(__name__)

SMALL_BREAKPOINTS = ('xs', 'sm')

MOBILE_TEXT_LIMIT = 150
MOBILE_WORD_BOUNDARY_RATIO = 0.8
MOBILE_FONT_BOOST = 1.2
MOBILE_MIN_FONT_SIZE = 18
ELLIPSIS = '...'

TABLE_HEADER_PREFIX = 'Header: '
TABLE_ROW_PREFIX = '• '

PERFORMANCE_SIMPLIFY_THRESHOLD = 20
PERFORMANCE_LAZY_THRESHOLD = 50


@dataclass(frozen=True)
class ScalingFactors:
    font_size: float
    spacing: float
    margins: float
    uniform: float
    content_density: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'fontSize': self.font_size,
            'spacing': self.spacing,
            'margins': self.margins,
            'uniform': self.uniform,
            'contentDensity': self.content_density,
        }


@dataclass(frozen=True)
class ContentScaling:
    density: float
    aspect: float

    @property
    def combined(self) -> float:
        return self.density * self.aspect


@dataclass(frozen=True)
class Classification:
    """Breakpoint for a canvas; aspect ratio is informational only"""
    breakpoint: BreakpointSpec
    width: float
    height: float
    aspect_ratio: float

    @property
    def key(self) -> str:
        return self.breakpoint.key


@dataclass
class ResponsiveValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def summarize_text(text: str, max_length: int = MOBILE_TEXT_LIMIT) -> str:
    """Cut text to max_length, preferring a word boundary late in the cut"""
    if len(text) <= max_length:
        return text
    truncated = text[:max_length]
    last_space = truncated.rfind(' ')
    if last_space > max_length * MOBILE_WORD_BOUNDARY_RATIO:
        truncated = truncated[:last_space]
    return truncated + ELLIPSIS


def table_to_list(table: TableContent) -> str:
    """Line-oriented rendering of a table for narrow canvases"""
    if not table.data:
        return table.text
    lines = []
    for index, row in enumerate(table.data):
        cells = [str(cell) for cell in row]
        if index == 0:
            lines.append(TABLE_HEADER_PREFIX + ', '.join(cells))
        else:
            lines.append(TABLE_ROW_PREFIX + ': '.join(cells))
    return '\n'.join(lines)


class ResponsiveEngine:
    """Adapts grids, spacing and content to the canvas breakpoint."""

    def __init__(self, config: Optional[LayoutConfig] = None, grid: Optional[GridSystem] = None):
        self.config = config or get_config()
        self.grid_system = grid or grid_system

    # --- classification -----------------------------------------------

    def classify(self, width: float, height: float = 0) -> BreakpointSpec:
        return self.classify_canvas(width, height).breakpoint

    def classify_canvas(self, width: float, height: float = 0) -> Classification:
        """
        Total classification over the width axis.

        Buckets are checked in ascending order by max width; the final
        open-ended bucket takes everything wider. Negative widths fall into
        the first bucket.
        """
        if width is None or isinstance(width, bool) or not math.isfinite(width):
            raise InvalidArgumentError('width', f"width must be a finite number, got {width!r}")

        specs = self.config.breakpoint_thresholds
        selected = None
        for spec in specs:
            if spec.max_width is None or width <= spec.max_width:
                selected = spec
                break
        if selected is None:
            selected = self.get_breakpoint(self.config.fallback_breakpoint)

        aspect_ratio = width / height if height else 0.0
        return Classification(breakpoint=selected, width=width, height=height, aspect_ratio=aspect_ratio)

    def get_breakpoint(self, key: str, warnings: Optional[List[str]] = None) -> BreakpointSpec:
        """Look up a breakpoint by key; unknown keys resolve to the fallback."""
        spec = self.config.get_breakpoint(key)
        if spec is not None:
            return spec
        message = f"Unknown breakpoint {key!r}; using {self.config.fallback_breakpoint}"
        logger.warning(message)
        if warnings is not None:
            warnings.append(message)
        return self.config.get_breakpoint(self.config.fallback_breakpoint)

    # --- scaling ------------------------------------------------------

    def scaling_factors(
        self,
        canvas: CanvasSize,
        breakpoint: Optional[BreakpointSpec] = None,
        reference_canvas: Optional[CanvasSize] = None
    ) -> ScalingFactors:
        reference = reference_canvas or self.config.reference_canvas
        breakpoint = breakpoint or self.classify(canvas.width, canvas.height)
        uniform = scale_ratio(canvas.width, canvas.height, reference.width, reference.height)
        return ScalingFactors(
            font_size=breakpoint.font_size * uniform,
            spacing=breakpoint.spacing * uniform,
            margins=breakpoint.margins * uniform,
            uniform=uniform,
            content_density=self.config.density_factors[breakpoint.content_density],
        )

    @staticmethod
    def calculate_content_scaling(canvas: CanvasSize, breakpoint: BreakpointSpec) -> ContentScaling:
        if breakpoint.key in SMALL_BREAKPOINTS:
            density = 0.8
        elif breakpoint.key == 'xl':
            density = 1.2
        else:
            density = 1.0

        aspect_ratio = canvas.aspect_ratio
        if aspect_ratio > 2.0:
            aspect = 1.1
        elif aspect_ratio < 1.3:
            aspect = 0.9
        else:
            aspect = 1.0
        return ContentScaling(density=density, aspect=aspect)

    @classmethod
    def scale_spacing(cls, spacing: Any, factor: float) -> Any:
        """Scale numbers nested in a spacing structure, rounding to whole pixels"""
        if isinstance(spacing, bool):
            return spacing
        if isinstance(spacing, (int, float)):
            return round(spacing * factor)
        if isinstance(spacing, Mapping):
            return {key: cls.scale_spacing(value, factor) for key, value in spacing.items()}
        return spacing

    # --- area reflow --------------------------------------------------

    def redistribute_areas(
        self,
        areas: Mapping[str, AreaSpec],
        target_columns: int
    ) -> Dict[str, GridArea]:
        """
        Re-flow areas for a narrower grid.

        With one target column each area becomes its own row in definition
        order. With two, areas alternate left/right and each side stacks in
        definition order, so reading row by row (left before right) yields
        the original sequence. Three or more columns keep the areas as they
        are. Malformed entries are dropped in every case.
        """
        parsed = self.grid_system.parse_areas(areas)
        if target_columns >= 3:
            return parsed

        names = list(parsed.keys())
        redistributed: Dict[str, GridArea] = {}
        if target_columns <= 1:
            for index, name in enumerate(names):
                row = index + 1
                redistributed[name] = GridArea(row_start=row, col_start=1, row_end=row + 1, col_end=2)
            return redistributed

        for index, name in enumerate(names):
            row = index // 2 + 1
            column = index % 2 + 1
            redistributed[name] = GridArea(row_start=row, col_start=column, row_end=row + 1, col_end=column + 1)
        return redistributed

    def adapt_config_to_breakpoint(self, base_config: Mapping[str, Any], breakpoint: BreakpointSpec) -> Dict[str, Any]:
        """
        Grid config for a breakpoint: fewer columns, reflowed areas, scaled spacing.

        Areas are re-flowed only when the grid must shrink to one or two
        columns. Shrinking to three or more columns leaves area maps and the
        authored column count untouched.
        """
        adapted = dict(base_config)
        base_columns = base_config.get('columns', self.grid_system.DEFAULT_COLUMNS)
        target_columns = min(base_columns, breakpoint.columns)
        areas = base_config.get('areas')

        if not areas:
            adapted['columns'] = target_columns
        elif target_columns < base_columns and target_columns < 3:
            reflowed = self.redistribute_areas(areas, target_columns)
            adapted['areas'] = {name: area.to_spec() for name, area in reflowed.items()}
            adapted['columns'] = target_columns
        else:
            # Areas are kept as authored, so the grid keeps the columns they address
            adapted['columns'] = base_columns

        for key in ('gap', 'margins'):
            if key in base_config and base_config[key] is not None:
                adapted[key] = self.scale_spacing(base_config[key], breakpoint.spacing)
        return adapted

    # --- content ------------------------------------------------------

    def optimize_content(self, items: Sequence[Any], breakpoint: BreakpointSpec) -> List[Any]:
        """
        Small-canvas content pass; other breakpoints return items unchanged.

        Explicit font sizes grow by 1.2x with an 18pt floor, long text is
        shortened and tables become line lists. Already optimized items are
        skipped, so the pass is idempotent.
        """
        if breakpoint.key not in SMALL_BREAKPOINTS:
            return list(items)
        return [self._optimize_item(item) for item in items]

    def _optimize_item(self, item: Any) -> Any:
        if item.mobile_optimized:
            return item

        font_size = item.font_size
        if font_size is not None:
            font_size = max(font_size * MOBILE_FONT_BOOST, MOBILE_MIN_FONT_SIZE)

        if isinstance(item, TableContent):
            return TextContent(
                type='body',
                text=table_to_list(item),
                importance=item.importance,
                area=item.area,
                font_size=font_size,
                mobile_optimized=True,
            )

        update: Dict[str, Any] = {'font_size': font_size, 'mobile_optimized': True}
        if len(item.text) > MOBILE_TEXT_LIMIT:
            update['text'] = summarize_text(item.text, MOBILE_TEXT_LIMIT)
            update['truncated'] = True
        return item.model_copy(update=update)

    # --- layout selection ---------------------------------------------

    @staticmethod
    def get_optimal_layout_type(item_count: int, breakpoint: BreakpointSpec) -> str:
        if item_count <= 1 or breakpoint.key in SMALL_BREAKPOINTS:
            return 'single-column'
        if breakpoint.key == 'md':
            if item_count <= 2:
                return 'double-column'
            if item_count <= 4:
                return 'quad-grid'
            return 'responsive-grid'
        if item_count == 2:
            return 'double-column'
        if item_count == 3:
            return 'triple-column'
        if item_count == 4:
            return 'quad-grid'
        if item_count <= 6:
            return 'feature-showcase'
        return 'responsive-grid'

    def generate_breakpoint_rules(self, base_layout_type: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
        """Media-query style rule table, one entry per breakpoint"""
        rules = {}
        for spec in self.config.breakpoint_thresholds:
            if spec.columns == 1:
                layout = 'single-column'
            elif spec.columns == 2:
                layout = 'double-column'
            else:
                layout = base_layout_type or 'triple-column'
            rules[spec.key] = {
                'condition': spec.condition,
                'rules': {
                    'columns': spec.columns,
                    'fontSize': f"{spec.font_size:g}em",
                    'spacing': f"{spec.spacing:g}rem",
                    'layout': layout,
                },
            }
        return rules

    def get_transition_thresholds(self) -> List[Tuple[str, str, float]]:
        """Widths at which classification moves to the next bucket"""
        specs = self.config.breakpoint_thresholds
        return [
            (current.key, following.key, current.max_width)
            for current, following in zip(specs, specs[1:])
        ]

    @staticmethod
    def get_performance_optimized_config(config: Mapping[str, Any], item_count: int) -> Dict[str, Any]:
        optimized = dict(config)
        if item_count > PERFORMANCE_SIMPLIFY_THRESHOLD:
            optimized.update({'animations': False, 'shadows': False, 'gradients': False})
        if item_count > PERFORMANCE_LAZY_THRESHOLD:
            optimized.update({'lazy_loading': True, 'virtual_scrolling': True})
        return optimized

    def validate_responsive_config(self, breakpoints: Optional[Sequence[BreakpointSpec]] = None) -> ResponsiveValidation:
        """Check that a breakpoint table is an ordered partition with sane multipliers"""
        specs = list(breakpoints if breakpoints is not None else self.config.breakpoint_thresholds)
        errors: List[str] = []
        warnings: List[str] = []

        if not specs:
            return ResponsiveValidation(False, ['At least one breakpoint is required'])

        previous: Optional[float] = None
        for spec in specs[:-1]:
            if spec.max_width is None:
                errors.append(f"Breakpoint {spec.key} is missing maxWidth")
                continue
            if previous is not None and spec.max_width <= previous:
                errors.append(f"Breakpoint {spec.key} maxWidth must be greater than {previous:g}")
            previous = spec.max_width

        last = specs[-1]
        if last.max_width is not None:
            errors.append(f"Breakpoint {last.key} must be open-ended so every width is classified")
        elif last.min_width is not None and previous is not None and last.min_width > previous + 1:
            warnings.append(f"Breakpoint {last.key} minWidth leaves a gap above {previous:g}")

        for spec in specs:
            if min(spec.font_size, spec.spacing, spec.margins) <= 0:
                errors.append(f"Breakpoint {spec.key} multipliers must be positive")
            if spec.columns < 1:
                errors.append(f"Breakpoint {spec.key} must have at least one column")
            if spec.columns > 12:
                warnings.append(f"Breakpoint {spec.key} uses {spec.columns} columns; more than 12 is unusual")

        return ResponsiveValidation(valid=not errors, errors=errors, warnings=warnings)


# Singleton instance
responsive_engine = ResponsiveEngine()
