"""
Responsive layout and grid engine for slides.

Typical use::

    from slide_layout import create_layout

    result = create_layout({
        "canvas": {"width": 1920, "height": 1080},
        "columns": "auto",
        "content": [{"type": "title", "text": "Quarterly review"}],
    })
"""

from slide_layout.config import LayoutConfig, get_config
from slide_layout.exceptions import (
    LayoutEngineError,
    InvalidArgumentError,
    UnsupportedRoleError,
    UnsupportedLayoutError,
    TemplateNotFoundError,
    ConfigurationError,
    InvalidConfigError,
)
from slide_layout.models.requests import LayoutRequest, LayoutResult
from slide_layout.services.layout_orchestrator import LayoutOrchestrator, create_layout

__version__ = "0.1.0"

__all__ = [
    'LayoutConfig',
    'get_config',
    'LayoutEngineError',
    'InvalidArgumentError',
    'UnsupportedRoleError',
    'UnsupportedLayoutError',
    'TemplateNotFoundError',
    'ConfigurationError',
    'InvalidConfigError',
    'LayoutRequest',
    'LayoutResult',
    'LayoutOrchestrator',
    'create_layout',
]
