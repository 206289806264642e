from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Optional, List, Dict, Any, Union, Literal

from slide_layout.exceptions import InvalidArgumentError, UnsupportedRoleError
from slide_layout.models.content import ContentItem, ViewingDistance
from slide_layout.models.geometry import CanvasSize, GridDescriptor, Rect


def _default_text_colors() -> Dict[str, str]:
    return {'primary': '#212121', 'secondary': '#757575'}


def _default_semantic_colors() -> Dict[str, str]:
    return {'success': '#4caf50', 'warning': '#ff9800', 'error': '#f44336', 'info': '#2196f3'}


class Theme(BaseModel):
    """Colours a layout is styled with"""
    name: str = 'default'
    background: str = Field(default='#ffffff', description="Slide background colour")
    primary: str = Field(default='#2196f3', description="Accent used for header and hero areas")
    text: Dict[str, str] = Field(default_factory=_default_text_colors, description="Text colours by role")
    semantic_colors: Dict[str, str] = Field(
        default_factory=_default_semantic_colors,
        description="Status colours: success, warning, error, info"
    )

    @property
    def text_primary(self) -> str:
        return self.text.get('primary', '#212121')

    @property
    def text_secondary(self) -> str:
        return self.text.get('secondary', self.text_primary)


class LayoutRequest(BaseModel):
    """Everything needed to lay out one slide"""
    canvas: CanvasSize = Field(..., description="Target canvas in pixels")
    columns: Union[int, Literal['auto']] = Field(default='auto', description="Fixed column count or 'auto'")
    template: Optional[Union[str, Dict[str, str]]] = Field(
        default=None,
        description="Template name from the library, or a map of area name to 'row / col / row / col'"
    )
    arrangement: Optional[Literal['header-content']] = Field(
        default=None,
        description="Extra area arrangement for generated grids"
    )
    content: List[ContentItem] = Field(default_factory=list)
    responsive: bool = True
    theme: Optional[Theme] = None
    viewing_distance: ViewingDistance = 'medium'

    @field_validator('canvas')
    @classmethod
    def _positive_canvas(cls, canvas: CanvasSize) -> CanvasSize:
        if not canvas.width or canvas.width <= 0 or not canvas.height or canvas.height <= 0:
            raise ValueError('canvas width and height must be positive')
        return canvas

    @field_validator('columns')
    @classmethod
    def _positive_columns(cls, columns: Union[int, str]) -> Union[int, str]:
        if isinstance(columns, int) and columns < 1:
            raise ValueError('columns must be at least 1')
        return columns

    @classmethod
    def parse(cls, data: Dict[str, Any]) -> 'LayoutRequest':
        """Validate raw request data, raising InvalidArgumentError on bad input"""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise _to_invalid_argument(e) from e


def _to_invalid_argument(error: ValidationError) -> InvalidArgumentError:
    first = error.errors()[0]
    location = '.'.join(str(part) for part in first.get('loc', ())) or 'request'
    if first.get('type') == 'union_tag_invalid':
        role = first.get('ctx', {}).get('tag', '')
        return UnsupportedRoleError(role, cause=error, context={'location': location})
    return InvalidArgumentError(location, f"Invalid {location}: {first.get('msg')}", cause=error)


class ElementStyle(BaseModel):
    """Style a rendering backend applies to a placed element"""
    font_size: float
    line_height: float
    bold: bool = False
    color: str = '#212121'
    alignment: Literal['left', 'center', 'right'] = 'left'


class PositionedElement(BaseModel):
    item: ContentItem
    position: Rect
    font_size: float
    line_height: float
    area: Optional[str] = None
    style: Optional[ElementStyle] = None


class BreakpointInfo(BaseModel):
    key: str
    name: str
    columns: int
    aspect_ratio: float = Field(..., description="Informational only; never affects classification")


class LayoutResult(BaseModel):
    positioned_elements: List[PositionedElement] = Field(default_factory=list)
    grid: GridDescriptor
    breakpoint: Optional[BreakpointInfo] = None
    layout_type: str = 'custom-grid'
    areas: Dict[str, str] = Field(default_factory=dict, description="Resolved area map in wire format")
    warnings: List[str] = Field(default_factory=list)


class ContrastCheckRequest(BaseModel):
    foreground: str
    background: str
    level: Optional[Literal['AA', 'AAA']] = None
    font_size: Optional[float] = Field(default=None, gt=0)
    bold: bool = False


class ContrastReport(BaseModel):
    passes: bool
    ratio: float
    required: float
    level: str
    large_text: bool
    recommendation: str
    foreground: str
    background: str


class ThemeCheckRequest(BaseModel):
    theme: Theme
    level: Optional[Literal['AA', 'AAA']] = None


class ThemeCheckResponse(BaseModel):
    passes: bool
    reports: Dict[str, ContrastReport] = Field(default_factory=dict)
    suggestions: Dict[str, str] = Field(default_factory=dict, description="Replacement colour per failing entry")
    optimized_theme: Optional[Theme] = None
    warnings: List[str] = Field(default_factory=list)
