"""
WCAG 2.x contrast validation for text and theme colours.

Malformed colours never raise from the validation entry points: they are
reported as a failing check with a warning. Only the raw math helpers
(luminance, contrast_ratio) reject bad input.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import logging

from slide_layout.config import ACCESSIBILITY_LEVELS, LayoutConfig, get_config
from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.requests import ContrastReport, Theme, ThemeCheckResponse
from slide_layout.utils.color import (
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    is_valid_color,
    ratio_from_luminance,
    rgb_luminance,
)

logger = logging.getLogger(__name__)

# Required contrast by level, as (normal text, large text)
REQUIRED_RATIOS: Dict[str, Tuple[float, float]] = {
    'AA': (4.5, 3.0),
    'AAA': (7.0, 4.5),
}

LARGE_TEXT_SIZE = 18
LARGE_BOLD_TEXT_SIZE = 14

CANDIDATE_TEXT_COLORS = ('#000000', '#ffffff', '#333333', '#666666', '#999999')

SEMANTIC_LIGHTNESS_SHIFT = 30
MIN_LIGHTNESS = 10
MAX_LIGHTNESS = 90


@dataclass
class ContrastValidation:
    passes: bool
    ratio: float
    required: float
    level: str
    large_text: bool
    warnings: List[str] = field(default_factory=list)


def luminance(color: str) -> float:
    """Relative luminance in [0, 1]"""
    rgb = hex_to_rgb(color)
    if rgb is None:
        raise InvalidArgumentError('color', f"Invalid colour: {color!r}")
    return rgb_luminance(rgb)


def contrast_ratio(color_a: str, color_b: str) -> float:
    """WCAG contrast ratio in [1, 21]; symmetric in its arguments"""
    return ratio_from_luminance(luminance(color_a), luminance(color_b))


def is_large_text(font_size: Optional[float], bold: bool = False) -> bool:
    if font_size is None:
        return False
    return font_size >= LARGE_TEXT_SIZE or (bold and font_size >= LARGE_BOLD_TEXT_SIZE)


def required_ratio(level: str, large_text: bool) -> float:
    normal, large = REQUIRED_RATIOS[level]
    return large if large_text else normal


def get_contrast_recommendation(ratio: float, required: float) -> str:
    """Human readable advice sized to the contrast deficit"""
    if ratio >= required:
        return 'Contrast ratio meets accessibility standards'
    deficit = required - ratio
    if deficit <= 1:
        return 'Minor contrast adjustment needed'
    if deficit <= 2:
        return 'Moderate contrast improvement required'
    return 'Significant contrast enhancement needed'


def get_improvement_hint(ratio: float, required: float) -> str:
    gap = required - ratio
    if gap > 3:
        return 'Consider using high contrast colors'
    if gap > 1.5:
        return 'Try darker text or lighter background'
    return 'Small adjustment needed'


class AccessibilityValidator:
    """Checks colour combinations against WCAG AA/AAA thresholds."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or get_config()

    def _level(self, level: Optional[str]) -> str:
        level = level or self.config.accessibility_level
        if level not in ACCESSIBILITY_LEVELS:
            raise InvalidArgumentError('level', f"Unsupported accessibility level: {level}")
        return level

    def validate(
        self,
        foreground: str,
        background: str,
        level: Optional[str] = None,
        large_text: bool = False
    ) -> ContrastValidation:
        level = self._level(level)
        required = required_ratio(level, large_text)

        warnings = [
            f"Malformed colour {color!r}; treated as failing contrast"
            for color in (foreground, background)
            if not is_valid_color(color)
        ]
        if warnings:
            for message in warnings:
                logger.warning(message)
            return ContrastValidation(False, 0.0, required, level, large_text, warnings)

        ratio = contrast_ratio(foreground, background)
        return ContrastValidation(
            passes=ratio >= required,
            ratio=round(ratio, 2),
            required=required,
            level=level,
            large_text=large_text,
        )

    def contrast_report(
        self,
        foreground: str,
        background: str,
        level: Optional[str] = None,
        font_size: Optional[float] = None,
        bold: bool = False
    ) -> ContrastReport:
        large = is_large_text(font_size, bold)
        result = self.validate(foreground, background, level, large)
        if result.passes:
            recommendation = get_contrast_recommendation(result.ratio, result.required)
        else:
            recommendation = (
                f"{get_contrast_recommendation(result.ratio, result.required)}. "
                f"{get_improvement_hint(result.ratio, result.required)}"
            )
        return ContrastReport(
            passes=result.passes,
            ratio=result.ratio,
            required=result.required,
            level=result.level,
            large_text=large,
            recommendation=recommendation,
            foreground=foreground,
            background=background,
        )

    def find_accessible_text_color(self, background: str, level: Optional[str] = None,
                                   large_text: bool = False) -> str:
        """First candidate that passes on the background, else black or white."""
        level = self._level(level)
        background_rgb = hex_to_rgb(background)
        if background_rgb is None:
            logger.warning(f"Malformed background colour {background!r}; defaulting text to black")
            return '#000000'

        for candidate in CANDIDATE_TEXT_COLORS:
            if self.validate(candidate, background, level, large_text).passes:
                return candidate
        return '#000000' if rgb_luminance(background_rgb) > 0.5 else '#ffffff'

    def validate_theme(self, theme: Theme, level: Optional[str] = None) -> ThemeCheckResponse:
        """Check every text and semantic colour of a theme against its background."""
        level = self._level(level)
        reports: Dict[str, ContrastReport] = {}
        suggestions: Dict[str, str] = {}
        warnings: List[str] = []

        entries = [(f"text.{name}", color) for name, color in theme.text.items()]
        entries += [(f"semantic.{name}", color) for name, color in theme.semantic_colors.items()]

        for key, color in entries:
            report = self.contrast_report(color, theme.background, level)
            reports[key] = report
            if not report.passes:
                suggestions[key] = self._suggest_replacement(key, color, theme.background, level)
                warnings.append(f"{key} {color} fails {level} on {theme.background} (ratio {report.ratio})")

        return ThemeCheckResponse(
            passes=not suggestions,
            reports=reports,
            suggestions=suggestions,
            optimized_theme=self.optimize_theme_for_accessibility(theme, level) if suggestions else None,
            warnings=warnings,
        )

    def optimize_theme_for_accessibility(self, theme: Theme, level: Optional[str] = None) -> Theme:
        """Return a copy of the theme with failing colours replaced"""
        level = self._level(level)
        text = dict(theme.text)
        semantic = dict(theme.semantic_colors)

        for name, color in theme.text.items():
            if not self.validate(color, theme.background, level).passes:
                text[name] = self.find_accessible_text_color(theme.background, level)

        for name, color in theme.semantic_colors.items():
            if not self.validate(color, theme.background, level).passes:
                semantic[name] = self.adjust_lightness_for_contrast(color, theme.background)

        return theme.model_copy(update={'text': text, 'semantic_colors': semantic})

    def adjust_lightness_for_contrast(self, color: str, background: str) -> str:
        """Shift HSL lightness away from the background by a fixed step"""
        hsl = hex_to_hsl(color)
        background_rgb = hex_to_rgb(background)
        if hsl is None or background_rgb is None:
            return color
        hue, saturation, lightness = hsl
        if rgb_luminance(background_rgb) > 0.5:
            lightness = max(MIN_LIGHTNESS, lightness - SEMANTIC_LIGHTNESS_SHIFT)
        else:
            lightness = min(MAX_LIGHTNESS, lightness + SEMANTIC_LIGHTNESS_SHIFT)
        return hsl_to_hex(hue, saturation, lightness)

    def _suggest_replacement(self, key: str, color: str, background: str, level: str) -> str:
        if key.startswith('semantic.'):
            return self.adjust_lightness_for_contrast(color, background)
        return self.find_accessible_text_color(background, level)


# Singleton instance
accessibility_validator = AccessibilityValidator()
