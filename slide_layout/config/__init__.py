from slide_layout.config.layout_config import (
    BreakpointSpec,
    FontRoleBand,
    LayoutConfig,
    ACCESSIBILITY_LEVELS,
    DEFAULT_BREAKPOINTS,
    DEFAULT_FONT_ROLE_BANDS,
    get_config,
    get_config_dict,
)
from slide_layout.config.logging_config import apply_logging_config, get_logger, get_logging_config

__all__ = [
    'BreakpointSpec',
    'FontRoleBand',
    'LayoutConfig',
    'ACCESSIBILITY_LEVELS',
    'DEFAULT_BREAKPOINTS',
    'DEFAULT_FONT_ROLE_BANDS',
    'get_config',
    'get_config_dict',
    'apply_logging_config',
    'get_logger',
    'get_logging_config',
]
