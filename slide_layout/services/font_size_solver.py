"""
Font size and line height solver.

Scales a role's base size to the canvas, adjusts it for text length,
viewing distance and importance, then clamps it into the role's band and
lifts it to the accessibility floor. Also derives margins and vertical text
spacing from the same canvas scale.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from slide_layout.config import FontRoleBand, LayoutConfig, get_config
from slide_layout.exceptions import InvalidArgumentError, UnsupportedRoleError
from slide_layout.models.geometry import CanvasSize, Margins
from slide_layout.utils.numbers import clamp, is_finite_number, round_half_up, scale_ratio

logger = logging.getLogger(__name__)

DISTANCE_FACTORS: Dict[str, float] = {'close': 0.9, 'medium': 1.0, 'far': 1.3}
IMPORTANCE_FACTORS: Dict[str, float] = {'low': 0.9, 'medium': 1.0, 'high': 1.15}

# (max content length, factor); anything longer gets LONG_CONTENT_FACTOR
CONTENT_LENGTH_STEPS = ((50, 1.0), (150, 0.95), (300, 0.85))
LONG_CONTENT_FACTOR = 0.75

SMALL_TEXT_THRESHOLD = 20
SMALL_TEXT_LEADING_BUMP = 0.1

BASE_MARGIN = 32
MIN_MARGIN = 8
MAX_MARGIN = 80
HORIZONTAL_MARGIN_RATIO = 1.3

TEXT_SPACING_MULTIPLES = {
    'paragraph': 1.75,
    'list_item': 0.75,
    'section': 2.5,
    'title': 1.25,
}


@dataclass
class FontSizingResult:
    """Resolved typography for one content unit."""
    role: str
    font_size: float
    line_height: float
    raw_size: float
    scale: float
    clamped: bool = False
    raised_to_floor: bool = False


@dataclass
class AccessibilityCheck:
    valid: bool
    issues: List[str] = field(default_factory=list)


def content_length_factor(content_length: int) -> float:
    for limit, factor in CONTENT_LENGTH_STEPS:
        if content_length <= limit:
            return factor
    return LONG_CONTENT_FACTOR


class FontSizeSolver:
    """Computes legible, proportionate font sizes from canvas and content hints."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or get_config()

    def band_for(self, role: str) -> FontRoleBand:
        band = self.config.font_role_bands.get(role)
        if band is None:
            raise UnsupportedRoleError(role)
        return band

    def canvas_scale(self, canvas: CanvasSize) -> float:
        reference = self.config.font_reference_canvas
        return scale_ratio(canvas.width, canvas.height, reference.width, reference.height)

    def responsive_font_size(
        self,
        base_size: Optional[float],
        canvas: Optional[CanvasSize],
        content_length: int = 0,
        viewing_distance: str = 'medium',
        importance: str = 'medium',
        role: str = 'body'
    ) -> float:
        return self.solve(
            base_size=base_size,
            canvas=canvas,
            content_length=content_length,
            viewing_distance=viewing_distance,
            importance=importance,
            role=role,
        ).font_size

    def solve(
        self,
        base_size: Optional[float],
        canvas: Optional[CanvasSize],
        content_length: int = 0,
        viewing_distance: str = 'medium',
        importance: str = 'medium',
        role: str = 'body'
    ) -> FontSizingResult:
        """
        Resolve font size and line height for one content unit.

        Raises InvalidArgumentError when the base size or canvas dimensions
        are missing or not positive, or when a hint has an unknown value.
        """
        _require_positive('base_size', base_size)
        if canvas is None:
            raise InvalidArgumentError('canvas', 'canvas is required')
        _require_positive('canvas.width', canvas.width)
        _require_positive('canvas.height', canvas.height)

        band = self.band_for(role)
        if viewing_distance not in DISTANCE_FACTORS:
            raise InvalidArgumentError('viewing_distance', f"Unsupported viewing distance: {viewing_distance}")
        if importance not in IMPORTANCE_FACTORS:
            raise InvalidArgumentError('importance', f"Unsupported importance: {importance}")

        scale = self.canvas_scale(canvas)
        raw_size = (
            base_size
            * scale
            * content_length_factor(max(0, content_length))
            * DISTANCE_FACTORS[viewing_distance]
            * IMPORTANCE_FACTORS[importance]
        )

        clamped_size = clamp(round(raw_size, 1), band.min, band.max)
        font_size = max(clamped_size, band.accessibility_floor)

        logger.debug(
            f"{role}: base={base_size} scale={scale:.3f} raw={raw_size:.2f} -> {font_size}"
        )

        return FontSizingResult(
            role=role,
            font_size=font_size,
            line_height=self.line_height(font_size, role),
            raw_size=raw_size,
            scale=scale,
            clamped=clamped_size != round(raw_size, 1),
            raised_to_floor=font_size > clamped_size,
        )

    def line_height(self, font_size: float, role: str = 'body') -> float:
        """Leading for a font size; small text gets proportionally more."""
        band = self.config.font_role_bands.get(role)
        ratio = band.line_height_ratio if band else self.config.font_role_bands['body'].line_height_ratio
        if font_size < SMALL_TEXT_THRESHOLD:
            ratio += SMALL_TEXT_LEADING_BUMP
        ratio = max(ratio, self.config.min_line_height_ratio)
        return round(font_size * ratio, 2)

    def calculate_responsive_margins(self, canvas: CanvasSize) -> Margins:
        """Slide margins proportional to canvas scale; sides get extra room"""
        margin = clamp(BASE_MARGIN * self.canvas_scale(canvas), MIN_MARGIN, MAX_MARGIN)
        side = margin * HORIZONTAL_MARGIN_RATIO
        return Margins(
            top=round_half_up(margin),
            right=round_half_up(side),
            bottom=round_half_up(margin),
            left=round_half_up(side),
        )

    @staticmethod
    def calculate_text_spacing(font_size: float) -> Dict[str, float]:
        return {name: round(font_size * multiple, 2) for name, multiple in TEXT_SPACING_MULTIPLES.items()}

    def validate_element_accessibility(self, role: str, font_size: float, line_height: float) -> AccessibilityCheck:
        issues = []
        band = self.config.font_role_bands.get(role)
        floor = band.accessibility_floor if band else min(
            b.accessibility_floor for b in self.config.font_role_bands.values()
        )
        if font_size < floor:
            issues.append(f"Font size too small: {font_size}pt")
        if line_height < self.config.min_line_height_ratio * font_size:
            issues.append('Line height too small')
        return AccessibilityCheck(valid=not issues, issues=issues)


def _require_positive(name: str, value: Optional[float]) -> None:
    if value is None:
        raise InvalidArgumentError(name, f"{name} is required")
    if not is_finite_number(value) or value <= 0:
        raise InvalidArgumentError(name, f"{name} must be a positive number, got {value!r}")


# Singleton instance
font_size_solver = FontSizeSolver()
