"""
Geometry value types shared by the grid, responsive and layout services.

All types are frozen dataclasses: a descriptor built for one layout call is
never modified afterwards.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class CanvasSize:
    """Target drawing surface in pixels"""
    width: float
    height: float

    @property
    def aspect_ratio(self) -> float:
        if self.height <= 0:
            return 0.0
        return self.width / self.height

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CanvasSize':
        return cls(width=data['width'], height=data['height'])


@dataclass(frozen=True)
class Margins:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0

    @classmethod
    def uniform(cls, value: float) -> 'Margins':
        return cls(top=value, right=value, bottom=value, left=value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Margins':
        return cls(
            top=data.get('top', 0),
            right=data.get('right', 0),
            bottom=data.get('bottom', 0),
            left=data.get('left', 0),
        )


@dataclass(frozen=True)
class GridArea:
    """Named grid rectangle, 1-indexed with exclusive end lines"""
    row_start: int
    col_start: int
    row_end: int
    col_end: int

    def to_spec(self) -> str:
        """Render back to the "row-start / col-start / row-end / col-end" form"""
        return f"{self.row_start} / {self.col_start} / {self.row_end} / {self.col_end}"

    def shifted(self, rows: int = 0, cols: int = 0) -> 'GridArea':
        return GridArea(
            row_start=self.row_start + rows,
            col_start=self.col_start + cols,
            row_end=self.row_end + rows,
            col_end=self.col_end + cols,
        )


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ColumnSpan:
    x: float
    width: float
    span_count: int


@dataclass(frozen=True)
class RowSpan:
    y: float
    height: float
    span_count: int


@dataclass(frozen=True)
class GridDescriptor:
    """Column grid over a canvas; derived sizes are computed by create_grid"""
    canvas: CanvasSize
    columns: int
    gutter: float
    margins: Margins
    content_width: float
    content_height: float
    column_width: float
