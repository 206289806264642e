"""
CSS Grid-like column system for slides.

Parses named area strings ("row-start / col-start / row-end / col-end",
1-indexed, end exclusive) and turns them into absolute pixel rectangles on a
column grid with gutters and margins.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import logging

from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.geometry import (
    CanvasSize,
    ColumnSpan,
    GridArea,
    GridDescriptor,
    Margins,
    Rect,
    RowSpan,
)
from slide_layout.utils.numbers import non_negative

logger = logging.getLogger(__name__)

AreaSpec = Union[str, GridArea]

AREA_FORMAT = '"row-start / col-start / row-end / col-end"'
MAX_RECOMMENDED_COLUMNS = 24


@dataclass
class GridBuild:
    """A grid together with the areas placed on it"""
    grid: GridDescriptor
    areas: Dict[str, GridArea]
    total_rows: int
    warnings: List[str] = field(default_factory=list)


@dataclass
class GridValidation:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'valid': self.valid, 'errors': self.errors, 'warnings': self.warnings}


class GridSystem:
    """Builds column grids and resolves grid areas to pixel geometry."""

    DEFAULT_COLUMNS = 12
    DEFAULT_GUTTER = 16
    DEFAULT_MARGIN = 32

    # Reusable area maps on a 12 column grid
    LAYOUT_TEMPLATES: Dict[str, Dict[str, Any]] = {
        'hero-content': {
            'areas': {
                'hero': '1 / 1 / 3 / 13',
                'content': '3 / 1 / 6 / 13',
            },
            'description': 'Large hero section with content below',
        },
        'sidebar-main': {
            'areas': {
                'sidebar': '1 / 1 / 6 / 4',
                'main': '1 / 4 / 6 / 13',
            },
            'description': 'Sidebar navigation with main content',
        },
        'three-section': {
            'areas': {
                'header': '1 / 1 / 2 / 13',
                'left': '2 / 1 / 6 / 5',
                'right': '2 / 5 / 6 / 9',
                'footer': '2 / 9 / 6 / 13',
            },
            'description': 'Header with three content sections',
        },
        'masonry-grid': {
            'columns': 4,
            'auto_flow': 'row dense',
            'description': 'Masonry-style grid layout',
        },
        'feature-showcase': {
            'areas': {
                'title': '1 / 1 / 2 / 13',
                'feature1': '2 / 1 / 4 / 5',
                'feature2': '2 / 5 / 4 / 9',
                'feature3': '2 / 9 / 4 / 13',
                'description': '4 / 1 / 6 / 13',
            },
            'description': 'Title with three feature highlights',
        },
    }

    # --- area parsing -------------------------------------------------

    @staticmethod
    def parse_area(spec: AreaSpec) -> Optional[GridArea]:
        """Parse one area string; None when it is malformed in any way."""
        if isinstance(spec, GridArea):
            return spec if _is_well_formed(spec) else None
        if not isinstance(spec, str):
            return None

        parts = [part.strip() for part in spec.split('/')]
        if len(parts) != 4:
            return None
        try:
            row_start, col_start, row_end, col_end = (int(part) for part in parts)
        except ValueError:
            return None

        area = GridArea(row_start=row_start, col_start=col_start, row_end=row_end, col_end=col_end)
        return area if _is_well_formed(area) else None

    def parse_areas(self, areas: Optional[Mapping[str, AreaSpec]]) -> Dict[str, GridArea]:
        """Parse named areas, silently dropping malformed entries."""
        parsed, _ = self.parse_areas_with_warnings(areas)
        return parsed

    def parse_areas_with_warnings(
        self,
        areas: Optional[Mapping[str, AreaSpec]]
    ) -> Tuple[Dict[str, GridArea], List[str]]:
        if not areas:
            return {}, []

        parsed: Dict[str, GridArea] = {}
        warnings: List[str] = []
        for name, spec in areas.items():
            area = self.parse_area(spec)
            if area is None:
                message = f"Dropped malformed grid area {name!r}: {spec!r}"
                logger.warning(message)
                warnings.append(message)
                continue
            parsed[name] = area
        return parsed, warnings

    @staticmethod
    def total_rows(areas: Mapping[str, GridArea]) -> int:
        """Number of row tracks the areas occupy"""
        if not areas:
            return 1
        return max(area.row_end for area in areas.values()) - 1

    # --- grid construction --------------------------------------------

    def create_grid(
        self,
        canvas: CanvasSize,
        columns: int = DEFAULT_COLUMNS,
        gutter: float = DEFAULT_GUTTER,
        margins: Optional[Margins] = None
    ) -> GridDescriptor:
        """
        Build a column grid over the canvas.

        Columns below 1 are treated as 1. A canvas smaller than its margins
        yields zero content dimensions instead of negative ones.
        """
        if margins is None:
            margins = Margins.uniform(self.DEFAULT_MARGIN)
        columns = max(1, int(columns))
        gutter = non_negative(gutter)

        content_width = non_negative(canvas.width - margins.left - margins.right)
        content_height = non_negative(canvas.height - margins.top - margins.bottom)
        column_width = non_negative((content_width - gutter * (columns - 1)) / columns)

        return GridDescriptor(
            canvas=canvas,
            columns=columns,
            gutter=gutter,
            margins=margins,
            content_width=content_width,
            content_height=content_height,
            column_width=column_width,
        )

    def create_grid_from_config(self, config: Mapping[str, Any]) -> GridBuild:
        """Build a grid plus its areas from a loose configuration mapping."""
        validation = self.validate_grid_config(config)
        if 'slideDimensions' not in config or config['slideDimensions'] is None:
            raise InvalidArgumentError('slideDimensions', 'slideDimensions is required')

        dimensions = config['slideDimensions']
        canvas = dimensions if isinstance(dimensions, CanvasSize) else CanvasSize.from_dict(dimensions)
        margins = config.get('margins')
        if margins is not None and not isinstance(margins, Margins):
            margins = Margins.from_dict(margins)

        grid = self.create_grid(
            canvas,
            columns=config.get('columns', self.DEFAULT_COLUMNS),
            gutter=config.get('gap', self.DEFAULT_GUTTER),
            margins=margins,
        )
        areas, warnings = self.parse_areas_with_warnings(config.get('areas'))
        total_rows = config.get('rows')
        if not isinstance(total_rows, int) or total_rows < 1:
            total_rows = self.total_rows(areas)

        return GridBuild(
            grid=grid,
            areas=areas,
            total_rows=total_rows,
            warnings=validation.warnings + warnings,
        )

    # --- geometry resolution ------------------------------------------

    @staticmethod
    def resolve_column_span(start_col: int, end_col: int, column_width: float, gutter: float) -> ColumnSpan:
        """Offset from the content box left edge and width of a column span"""
        span_count = _span(start_col, end_col, 'column')
        x = (start_col - 1) * (column_width + gutter)
        width = column_width * span_count + gutter * (span_count - 1)
        return ColumnSpan(x=x, width=width, span_count=span_count)

    @staticmethod
    def resolve_row_span(
        start_row: int,
        end_row: int,
        content_height: float,
        total_rows: int,
        gutter: float = 0
    ) -> RowSpan:
        """Offset from the content box top edge and height of a row span"""
        span_count = _span(start_row, end_row, 'row')
        total_rows = max(1, int(total_rows))
        row_height = non_negative((content_height - gutter * (total_rows - 1)) / total_rows)
        y = (start_row - 1) * (row_height + gutter)
        height = row_height * span_count + gutter * (span_count - 1)
        return RowSpan(y=y, height=height, span_count=span_count)

    def resolve_area(self, area: GridArea, grid: GridDescriptor, total_rows: int) -> Rect:
        """Absolute rectangle of an area; rows share the grid gutter"""
        columns = self.resolve_column_span(area.col_start, area.col_end, grid.column_width, grid.gutter)
        rows = self.resolve_row_span(
            area.row_start, area.row_end, grid.content_height, total_rows, gutter=grid.gutter
        )
        return Rect(
            x=grid.margins.left + columns.x,
            y=grid.margins.top + rows.y,
            width=columns.width,
            height=rows.height,
        )

    # --- validation ---------------------------------------------------

    def validate_grid_config(self, config: Mapping[str, Any]) -> GridValidation:
        errors: List[str] = []
        warnings: List[str] = []

        if not config.get('slideDimensions'):
            errors.append('slideDimensions is required')

        columns = config.get('columns')
        if columns is not None and (columns < 1 or columns > MAX_RECOMMENDED_COLUMNS):
            warnings.append(f'Column count should be between 1 and {MAX_RECOMMENDED_COLUMNS}')

        for name, spec in (config.get('areas') or {}).items():
            if self.parse_area(spec) is None:
                errors.append(f'Invalid area definition for {name}: should be {AREA_FORMAT}')

        return GridValidation(valid=not errors, errors=errors, warnings=warnings)

    def get_layout_templates(self) -> Dict[str, Dict[str, Any]]:
        return {name: dict(template) for name, template in self.LAYOUT_TEMPLATES.items()}


def _is_well_formed(area: GridArea) -> bool:
    return (
        area.row_start >= 1
        and area.col_start >= 1
        and area.row_end > area.row_start
        and area.col_end > area.col_start
    )


def _span(start: int, end: int, axis: str) -> int:
    if end <= start:
        raise InvalidArgumentError(
            f'end_{axis}',
            f"{axis} span end ({end}) must be greater than start ({start})"
        )
    return end - start


# Singleton instance
grid_system = GridSystem()
