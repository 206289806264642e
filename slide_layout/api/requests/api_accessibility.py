"""
API endpoints for colour contrast and theme accessibility checks
"""
from fastapi import APIRouter, HTTPException
import logging

from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.requests import (
    ContrastCheckRequest,
    ContrastReport,
    ThemeCheckRequest,
    ThemeCheckResponse,
)
from slide_layout.services.accessibility_validator import accessibility_validator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/api/accessibility/contrast")
async def check_contrast(request: ContrastCheckRequest) -> ContrastReport:
    """
    Check one foreground/background pair; malformed colours report a failure
    """
    try:
        return accessibility_validator.contrast_report(
            request.foreground,
            request.background,
            level=request.level,
            font_size=request.font_size,
            bold=request.bold,
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/api/accessibility/theme")
async def check_theme(request: ThemeCheckRequest) -> ThemeCheckResponse:
    """
    Check every text and semantic colour of a theme and suggest replacements
    """
    result = accessibility_validator.validate_theme(request.theme, level=request.level)
    if not result.passes:
        logger.info(f"Theme {request.theme.name} has {len(result.suggestions)} failing colour(s)")
    return result
