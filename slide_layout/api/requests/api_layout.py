"""
API endpoints for layout computation and the template catalogue
"""
from fastapi import APIRouter, HTTPException
from typing import Any, Dict, List, Optional
import logging

from slide_layout.exceptions import InvalidArgumentError
from slide_layout.models.geometry import CanvasSize
from slide_layout.models.requests import LayoutRequest, LayoutResult
from slide_layout.services.layout_orchestrator import LayoutOrchestrator, get_layout_info
from slide_layout.services.layout_templates import layout_templates
from slide_layout.services.responsive_engine import responsive_engine

logger = logging.getLogger(__name__)
router = APIRouter()

orchestrator = LayoutOrchestrator()


@router.post("/api/layout")
async def compute_layout(request: LayoutRequest) -> LayoutResult:
    """
    Compute element geometry, font sizes and styles for one slide
    """
    try:
        return orchestrator.create_layout(request)
    except InvalidArgumentError as e:
        logger.info(f"Rejected layout request: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/api/layout/templates")
async def list_templates(category: Optional[str] = None, keyword: Optional[str] = None,
                         responsive: bool = False) -> Dict[str, Any]:
    templates = layout_templates.search_templates(category=category, keyword=keyword, responsive=responsive)
    return {
        "templates": [template.to_dict() for template in templates],
        "categories": layout_templates.get_categories(),
    }


@router.get("/api/layout/templates/{name}/preview")
async def preview_template(name: str) -> Dict[str, Any]:
    try:
        return layout_templates.generate_preview(name)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/api/layout/types/{layout_type}")
async def describe_layout_type(layout_type: str) -> Dict[str, Any]:
    try:
        return get_layout_info(layout_type)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/api/layout/breakpoints/{width}/{height}")
async def classify_canvas(width: float, height: float) -> Dict[str, Any]:
    try:
        classification = responsive_engine.classify_canvas(width, height)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))

    breakpoint = classification.breakpoint
    scaling = None
    if width > 0 and height > 0:
        scaling = responsive_engine.scaling_factors(CanvasSize(width=width, height=height), breakpoint)
    return {
        "breakpoint": breakpoint.to_dict(),
        "aspectRatio": round(classification.aspect_ratio, 4),
        "scaling": scaling.to_dict() if scaling else None,
        "rules": responsive_engine.generate_breakpoint_rules()[breakpoint.key],
    }


@router.get("/api/layout/breakpoints")
async def list_breakpoints() -> List[Dict[str, Any]]:
    return [spec.to_dict() for spec in responsive_engine.config.breakpoint_thresholds]
