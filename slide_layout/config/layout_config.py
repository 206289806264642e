"""
Configuration for the layout engine.

The options object carries everything the engine needs to be tuned per
brand or deployment:
- reference canvases for responsive scaling and font sizing
- ordered breakpoint thresholds
- per-role font bands and accessibility floors
- the WCAG conformance level used for colour checks

A LayoutConfig is immutable. Callers that need different values build a new
one with with_overrides(); get_config() returns the shared default.
"""

from dataclasses import dataclass, field, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from slide_layout.exceptions import InvalidConfigError
from slide_layout.models.geometry import CanvasSize


ACCESSIBILITY_LEVELS = ('AA', 'AAA')
DENSITY_CATEGORIES = ('low', 'medium', 'high')


@dataclass(frozen=True)
class BreakpointSpec:
    """One width bucket of the responsive partition"""
    key: str
    name: str
    columns: int
    font_size: float
    spacing: float
    margins: float
    content_density: str
    max_width: Optional[float] = None
    min_width: Optional[float] = None

    @property
    def condition(self) -> str:
        if self.max_width is not None:
            return f"max-width: {self.max_width:g}px"
        return f"min-width: {self.min_width:g}px"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'key': self.key,
            'name': self.name,
            'columns': self.columns,
            'fontSize': self.font_size,
            'spacing': self.spacing,
            'margins': self.margins,
            'contentDensity': self.content_density,
            'maxWidth': self.max_width,
            'minWidth': self.min_width,
        }


@dataclass(frozen=True)
class FontRoleBand:
    """Font sizing rules for one content role"""
    default: float
    min: float
    max: float
    accessibility_floor: float = 14
    line_height_ratio: float = 1.4


DEFAULT_BREAKPOINTS: Tuple[BreakpointSpec, ...] = (
    BreakpointSpec('xs', 'Extra Small', columns=1, font_size=0.7, spacing=0.8, margins=0.6,
                   content_density='low', max_width=480),
    BreakpointSpec('sm', 'Small', columns=1, font_size=0.8, spacing=0.9, margins=0.8,
                   content_density='low', max_width=768),
    BreakpointSpec('md', 'Medium', columns=2, font_size=0.9, spacing=1.0, margins=1.0,
                   content_density='medium', max_width=1024),
    BreakpointSpec('lg', 'Large', columns=3, font_size=1.0, spacing=1.0, margins=1.2,
                   content_density='medium', max_width=1440),
    BreakpointSpec('xl', 'Extra Large', columns=4, font_size=1.1, spacing=1.1, margins=1.4,
                   content_density='high', min_width=1441),
)

DEFAULT_FONT_ROLE_BANDS: Dict[str, FontRoleBand] = {
    'title': FontRoleBand(default=44, min=36, max=60, accessibility_floor=28, line_height_ratio=1.2),
    'heading': FontRoleBand(default=32, min=28, max=40, accessibility_floor=24, line_height_ratio=1.3),
    'subheading': FontRoleBand(default=28, min=24, max=32),
    'body': FontRoleBand(default=24, min=20, max=28, accessibility_floor=18, line_height_ratio=1.4),
    'caption': FontRoleBand(default=20, min=18, max=24, accessibility_floor=16, line_height_ratio=1.5),
    'footnote': FontRoleBand(default=16, min=14, max=18),
}

DEFAULT_DENSITY_FACTORS: Dict[str, float] = {'low': 0.7, 'medium': 1.0, 'high': 1.3}


@dataclass(frozen=True)
class LayoutConfig:
    """Master configuration"""
    # Responsive scaling is measured against a full-HD canvas
    reference_canvas: CanvasSize = CanvasSize(1920, 1080)
    # Font sizes are authored for the standard 16:9 slide
    font_reference_canvas: CanvasSize = CanvasSize(960, 540)
    breakpoint_thresholds: Tuple[BreakpointSpec, ...] = DEFAULT_BREAKPOINTS
    font_role_bands: Mapping[str, FontRoleBand] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_FONT_ROLE_BANDS))
    )
    accessibility_level: str = 'AA'
    min_line_height_ratio: float = 1.5
    density_factors: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_DENSITY_FACTORS))
    )
    fallback_breakpoint: str = 'md'

    # Orchestrator spacing
    base_gutter: float = 16
    base_margin: float = 48
    max_spacing_scale: float = 1.5
    template_columns: int = 12
    max_columns: int = 6

    def __post_init__(self):
        # Freeze any plain dicts handed in by callers
        if not isinstance(self.font_role_bands, MappingProxyType):
            object.__setattr__(self, 'font_role_bands', MappingProxyType(dict(self.font_role_bands)))
        if not isinstance(self.density_factors, MappingProxyType):
            object.__setattr__(self, 'density_factors', MappingProxyType(dict(self.density_factors)))
        object.__setattr__(self, 'breakpoint_thresholds', tuple(self.breakpoint_thresholds))

    @property
    def roles(self) -> Tuple[str, ...]:
        return tuple(self.font_role_bands.keys())

    def get_breakpoint(self, key: str) -> Optional[BreakpointSpec]:
        for spec in self.breakpoint_thresholds:
            if spec.key == key:
                return spec
        return None

    def with_overrides(self, **changes: Any) -> 'LayoutConfig':
        """Return a validated copy with the given fields replaced"""
        config = replace(self, **changes)
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            'referenceCanvas': {
                'width': self.reference_canvas.width,
                'height': self.reference_canvas.height,
            },
            'fontReferenceCanvas': {
                'width': self.font_reference_canvas.width,
                'height': self.font_reference_canvas.height,
            },
            'breakpointThresholds': [bp.to_dict() for bp in self.breakpoint_thresholds],
            'fontRoleBands': {
                role: {
                    'default': band.default,
                    'min': band.min,
                    'max': band.max,
                    'accessibilityFloor': band.accessibility_floor,
                    'lineHeightRatio': band.line_height_ratio,
                }
                for role, band in self.font_role_bands.items()
            },
            'accessibilityLevel': self.accessibility_level,
        }

    def validate(self) -> None:
        """Validate configuration values"""
        for label, canvas in (('reference_canvas', self.reference_canvas),
                              ('font_reference_canvas', self.font_reference_canvas)):
            if canvas.width <= 0 or canvas.height <= 0:
                raise InvalidConfigError(f"{label} must have positive dimensions, got {canvas}")

        if self.accessibility_level not in ACCESSIBILITY_LEVELS:
            raise InvalidConfigError(
                f"accessibility_level must be one of {ACCESSIBILITY_LEVELS}, got {self.accessibility_level!r}"
            )

        if self.min_line_height_ratio <= 0:
            raise InvalidConfigError(f"min_line_height_ratio must be positive, got {self.min_line_height_ratio}")

        self._validate_breakpoints()
        self._validate_font_bands()

        for density in DENSITY_CATEGORIES:
            if density not in self.density_factors:
                raise InvalidConfigError(f"density_factors missing category {density!r}")

    def _validate_breakpoints(self) -> None:
        specs = self.breakpoint_thresholds
        if not specs:
            raise InvalidConfigError("breakpoint_thresholds must not be empty")

        keys = [spec.key for spec in specs]
        if len(set(keys)) != len(keys):
            raise InvalidConfigError(f"breakpoint keys must be unique, got {keys}")
        if self.fallback_breakpoint not in keys:
            raise InvalidConfigError(f"fallback_breakpoint {self.fallback_breakpoint!r} is not a breakpoint key")

        # Every bucket but the last is bounded above; the last one is open
        previous_max = -1.0
        for spec in specs[:-1]:
            if spec.max_width is None:
                raise InvalidConfigError(f"breakpoint {spec.key} needs a max_width")
            if spec.max_width <= previous_max:
                raise InvalidConfigError(f"breakpoint {spec.key} max_width must increase, got {spec.max_width}")
            previous_max = spec.max_width
        if specs[-1].max_width is not None:
            raise InvalidConfigError(f"last breakpoint {specs[-1].key} must not have a max_width")

        for spec in specs:
            if spec.columns < 1:
                raise InvalidConfigError(f"breakpoint {spec.key} columns must be at least 1, got {spec.columns}")
            if min(spec.font_size, spec.spacing, spec.margins) <= 0:
                raise InvalidConfigError(f"breakpoint {spec.key} multipliers must be positive")
            if spec.content_density not in DENSITY_CATEGORIES:
                raise InvalidConfigError(
                    f"breakpoint {spec.key} content_density must be one of {DENSITY_CATEGORIES}"
                )

    def _validate_font_bands(self) -> None:
        if not self.font_role_bands:
            raise InvalidConfigError("font_role_bands must not be empty")
        for role, band in self.font_role_bands.items():
            if band.min <= 0 or band.min > band.max:
                raise InvalidConfigError(f"font band {role} must satisfy 0 < min <= max, got {band.min}-{band.max}")
            if not band.min <= band.default <= band.max:
                raise InvalidConfigError(f"font band {role} default {band.default} is outside {band.min}-{band.max}")
            if band.accessibility_floor > band.max:
                raise InvalidConfigError(
                    f"font band {role} accessibility floor {band.accessibility_floor} exceeds max {band.max}"
                )
            if band.line_height_ratio <= 0:
                raise InvalidConfigError(f"font band {role} line_height_ratio must be positive")


@lru_cache(maxsize=1)
def get_config() -> LayoutConfig:
    """Get the shared default configuration"""
    config = LayoutConfig()
    config.validate()
    return config


def get_config_dict() -> Dict[str, Any]:
    """Get configuration as dictionary"""
    return get_config().to_dict()
